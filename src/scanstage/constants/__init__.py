"""Static constants shared across scanstage modules."""
