"""
Constraint package initialization.
"""

from .base import Constraint, FieldInfo, ROOT_FIELD, TypeConstraint, ValidationContext
from .strings import StringConstraint
from .numbers import NumberConstraint
from .booleans import BooleanConstraint
from .nulls import NullConstraint
from .arrays import ArrayConstraint
from .objects import ObjectConstraint
from .logical import (
    AllOfConstraint,
    AnyOfConstraint,
    OneOfConstraint,
    NotConstraint
)
from .enums import EnumConstraint
from .consts import ConstConstraint
from .types import AnyConstraint, LazyTypeConstraint
from .combined import CombinedConstraint, merge_into
from .properties import PropertyConstraint
from .conditional import ChainEntry, ChainOutcome, ConditionChain, ConditionalConstraint

__all__ = [
    "Constraint",
    "FieldInfo",
    "ROOT_FIELD",
    "TypeConstraint",
    "ValidationContext",
    "StringConstraint",
    "NumberConstraint",
    "BooleanConstraint",
    "NullConstraint",
    "ArrayConstraint",
    "ObjectConstraint",
    "AllOfConstraint",
    "AnyOfConstraint",
    "OneOfConstraint",
    "NotConstraint",
    "EnumConstraint",
    "ConstConstraint",
    "AnyConstraint",
    "LazyTypeConstraint",
    "CombinedConstraint",
    "merge_into",
    "PropertyConstraint",
    "ChainEntry",
    "ChainOutcome",
    "ConditionChain",
    "ConditionalConstraint"
]
