"""Bundled stage catalog for Solana program audits.

Each entry is ``(label, weight, subtitles)``.  The first entry is the gating
phase and carries no subtitles.
"""

from __future__ import annotations

DEFAULT_STAGE_CATALOG: tuple[tuple[str, str | None, tuple[str, ...]], ...] = (
    ("Parsing rust files", None, ()),
    (
        "Computing complexity scores",
        "20/100",
        (
            "Lines Of Code",
            "Number of functions/instructions handlers",
            "Code Complexity & Control Flow",
            "Modularity and Files/Modules Count",
            "Documentation & Clarity",
            "External Dependencies",
            "Testing Coverage & QA",
        ),
    ),
    (
        "Detecting security vulnerability hotspots",
        "30/100",
        (
            "Access-Controlled Handler",
            "PDA Seed Surface & Ownership",
            "Cross-Program Invocation (CPI)",
            "Input/Constraint Surface (Accounts & Params)",
            "Arithmetic Operation",
            "Privileged Roles & Admin Action",
            "Unsafe / Low-Level Usage",
            "Error-Handling Footprint",
        ),
    ),
    (
        "Calculating Audit Effort Units (AEU)",
        "20/100",
        (
            "Upgradeability and Governance Control",
            "External Integration & Oracles",
            "Composability and Inter-Program Complexity",
            "Statefulness and Sequence of Operations",
            "Denial of Service & Resource Limits",
            "Operational Security Factors",
        ),
    ),
    (
        "Issuing commit-bound receipt via Arcium",
        "30/100",
        (
            "Financial Logic Intricacy",
            "Number of Assets and Asset Types",
            "Invariants and Risk Parameters",
            "Oracle and Price Feed Usage",
            "Potential Profit Attack Vectors",
            "Value at Risk & Asset Volume",
            "Game Theory and Incentives",
        ),
    ),
)
