from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Import option dataclasses.

These are the domain-side settings consumed by the builders. The YAML loader in
charmatrix/config/loader.py produces them via ``ImportConfig.to_options()``;
library callers can construct them directly.
"""


class MatrixMode(Enum):
    """Explicit matrix mode, either forced by the caller or detected."""
    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


class UnmatchedStatePolicy(Enum):
    """What to do with a discrete cell token that names no declared state.

    - LENIENT: use the character's first symbol and record a warning
    - STRICT: raise UnknownStateError
    """
    LENIENT = "lenient"
    STRICT = "strict"


@dataclass(frozen=True)
class ImportOptions:
    """Per-call builder options. Defaults reproduce the upload behaviour."""
    unmatched_state_policy: UnmatchedStatePolicy = UnmatchedStatePolicy.LENIENT
    # 62 記号を超える状態数は既定でエラー。True の場合のみ切り詰める
    allow_symbol_truncation: bool = False
