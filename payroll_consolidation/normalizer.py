"""
Class name normalization.

Maps free-text class names from the booking platform to canonical class
categories using an ordered table of substring rules.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import pandas as pd

from payroll_consolidation.models import UNCATEGORIZED

logger = logging.getLogger(__name__)

EXPRESS = "express"


@dataclass(frozen=True)
class ClassRule:
    """
    One substring rule of the normalization table.
    
    A name matches when it contains at least one of ``any_of`` (if given),
    every term of ``all_of`` and none of ``none_of``.
    """
    category: str
    any_of: Tuple[str, ...] = ()
    all_of: Tuple[str, ...] = ()
    none_of: Tuple[str, ...] = ()
    
    def matches(self, name: str) -> bool:
        if self.any_of and not any(term in name for term in self.any_of):
            return False
        if not all(term in name for term in self.all_of):
            return False
        return not any(term in name for term in self.none_of)


def _contains(term: str, category: str) -> ClassRule:
    return ClassRule(category, all_of=(term,))


def _express(term: str, category: str) -> ClassRule:
    return ClassRule(category, all_of=(EXPRESS, term))


def _not_express(term: str, category: str) -> ClassRule:
    return ClassRule(category, all_of=(term,), none_of=(EXPRESS,))


# Evaluated top to bottom, first match wins. Terms overlap ("hc", "fit",
# "mat", "back"), so reordering changes results.
CLASS_RULES: List[ClassRule] = [
    _contains("amped", "Studio Amped Up!"),
    ClassRule(
        "Studio Hosted Class",
        any_of=("hosted", "bridal shower class!", "sign up link", "hc"),
    ),
    _contains("please see pop up @ kitab mahal", "Outdoor Class"),
    _contains("n/a", "Invalid"),
    _express("back", "Studio Back Body Blaze Express"),
    _not_express("back", "Studio Back Body Blaze"),
    _not_express("barre 57", "Studio Barre 57"),
    _express("barre 57", "Studio Barre 57 Express"),
    _not_express("cardio", "Studio Cardio Barre"),
    _express("cardio", "Studio Cardio Barre Express"),
    _not_express("mat", "Studio Mat 57"),
    _express("mat", "Studio Mat 57 Express"),
    _not_express("hiit", "Studio HIIT"),
    _express("hiit", "Studio HIIT Express"),
    _not_express("foundation", "Studio Foundations"),
    _express("foundation", "Studio Foundations Express"),
    _not_express("fit", "Studio FIT"),
    _express("fit", "Studio FIT Express"),
    _not_express("trainer", "Studio Trainers Choice"),
    _express("trainer", "Studio Trainers Choice Express"),
    _contains("sweat", "Studio Sweat in 30"),
    _contains("recovery", "Studio Recovery"),
    ClassRule(
        "Studio Hosted Class",
        any_of=(
            "p57 x", "physique 57 x", "x physique 57",
            "birthday", "sundowner", "bridal",
        ),
    ),
    _express("powercycle", "Studio powerCycle Express"),
    _contains("powercycle", "Studio powerCycle"),
    ClassRule(
        "Others",
        any_of=(
            "studio pre/post natal class",
            "olympics finale",
            "pop up class at raheja vivarea",
            "bangalore rugby club x physique 57",
        ),
    ),
    # Package and administrative names map 1:1 to a display label
    _contains("flex 30 single class", "Flex 30 Single Class"),
    _contains("studio 1 month unlimited", "Studio 1 Month Unlimited"),
    _contains("studio 8 class package", "Studio 8 Class Package"),
    _contains("studio single class", "Studio Single Class"),
    _contains("studio 12 class package", "Studio 12 Class Package"),
    _contains("studio 4 class package", "Studio 4 Class Package"),
    _contains("studio open barre class", "Studio Open Barre Class"),
    _contains("studio 2 week unlimited", "Studio 2 Week Unlimited"),
    _contains("studio complimentary class", "Studio Complimentary Class"),
    _contains("studio free influencer class", "Studio Free Influencer Class"),
    _contains("studio newcomers 2 week unlimited", "Studio Newcomers 2 Week Unlimited"),
    _contains("studio annual unlimited", "Studio Annual Unlimited"),
    _contains("outdoor complimentary class", "Outdoor Complimentary Class"),
    _contains("studio community barre", "Studio Community Barre"),
    _contains("sunrise class", "SUNRISE CLASS"),
    _contains("virtual private apt", "Virtual Private Apt"),
    _contains("studio private apt", "Studio Private Apt"),
    _contains("open barre complimentary class", "OPEN BARRE CLASS"),
    _contains("ff class test", "FF CLASS TEST"),
    _contains("open barre class", "OPEN BARRE CLASS"),
]

CANONICAL_CATEGORIES = frozenset(rule.category for rule in CLASS_RULES) | {UNCATEGORIZED}


def match_rule(raw_name: str, rules: Optional[List[ClassRule]] = None) -> Optional[ClassRule]:
    """
    Find the first rule matching a class name.
    
    Args:
        raw_name: Class name as exported by the booking platform
        rules: Rule table to search (defaults to CLASS_RULES)
        
    Returns:
        The first matching ClassRule, or None if nothing matches
    """
    name = str(raw_name).lower()
    for rule in CLASS_RULES if rules is None else rules:
        if rule.matches(name):
            return rule
    return None


def normalize(raw_name: str) -> str:
    """
    Map a raw class name to its canonical category.
    
    Matching is case-insensitive. Names that no rule recognises fall
    through to "Uncategorized" rather than failing.
    
    Args:
        raw_name: Class name as exported by the booking platform
        
    Returns:
        Canonical category name (never empty)
    """
    rule = match_rule(raw_name)
    if rule is None:
        logger.debug(f"No class rule matched '{raw_name}', using {UNCATEGORIZED}")
        return UNCATEGORIZED
    return rule.category


def add_cleaned_class(df: pd.DataFrame, name_col: str = "class_name") -> pd.DataFrame:
    """
    Add a cleaned_class column with the canonical category of each row.
    
    Each distinct name is classified once and mapped back onto the rows.
    
    Args:
        df: DataFrame with a class name column
        name_col: Name of the class name column
        
    Returns:
        DataFrame with added cleaned_class column
    """
    df = df.copy()
    
    if name_col not in df.columns:
        raise ValueError(f"DataFrame must have {name_col} column")
    
    categories = {name: normalize(name) for name in df[name_col].unique()}
    df["cleaned_class"] = df[name_col].map(categories)
    
    uncategorized = (df["cleaned_class"] == UNCATEGORIZED).sum()
    logger.info(
        f"Normalized {len(categories)} distinct class names into "
        f"{df['cleaned_class'].nunique()} categories "
        f"({uncategorized} rows uncategorized)"
    )
    return df
