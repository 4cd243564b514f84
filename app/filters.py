# app/filters.py
"""Feed filter predicates.

A ``FeedFilter`` is an explicit set of optional clauses over listing
attributes. Clauses are combined with AND; the visibility clause is always
present so a filter can never select non-public listings.
"""
from dataclasses import dataclass
from typing import List, Optional
from sqlalchemy import and_
from .models import Listing, VISIBILITY_PUBLIC
from .utils import parse_int

# bounds of the 32-bit year column
YEAR_MIN, YEAR_MAX = -2**31, 2**31 - 1

@dataclass(frozen=True)
class FeedFilter:
    country: Optional[str] = None
    year: Optional[int] = None

    @classmethod
    def from_query(cls, country: Optional[str] = None, year: Optional[str] = None) -> "FeedFilter":
        # empty strings, unparseable or out-of-range years and year 0 all mean "no clause"
        parsed = parse_int(year)
        if parsed is not None and not YEAR_MIN <= parsed <= YEAR_MAX:
            parsed = None
        return cls(country=country or None, year=parsed or None)

    def clauses(self) -> List:
        conds = [Listing.visibility == VISIBILITY_PUBLIC]
        if self.country:
            conds.append(Listing.country == self.country)
        if self.year:
            conds.append(Listing.year == self.year)
        return conds

    def to_clause(self):
        return and_(*self.clauses())

PUBLIC_ONLY = FeedFilter()
