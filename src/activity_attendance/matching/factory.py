from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .strategies.base import LabelMatcher
from .strategies.day_qualified import DayQualifiedMatcher
from .strategies.exact import ExactMatcher
from .strategies.semantic import SemanticMatcher
from .strategies.substring import SubstringMatcher


@dataclass
class LabelMatcherFactory:
    """Factory Pattern: the ordered matcher chain, most specific first."""

    include_substring: bool = True

    def chain(self) -> Tuple[LabelMatcher, ...]:
        matchers = [ExactMatcher(), DayQualifiedMatcher(), SemanticMatcher()]
        if self.include_substring:
            matchers.append(SubstringMatcher())
        return tuple(matchers)
