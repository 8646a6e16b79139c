"""Hyperparameter record for the tagger.

A `TaggerOptions` instance is built once, either from keyword arguments, from
a text option file or from a binary model file, and is read-only afterwards.

Four fields (`beam`, `beam_mass`, `delta`, `sigma`) can be left unset. They are
`None` in memory and `-1` in every serialized form.
"""

from enum import IntEnum
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import Estimator, Inference, Regularization

UNSET = -1
FLOAT_TOLERANCE = 0.001

# Serialization order of the binary and text formats.
FIELD_ORDER = (
    "estimator",
    "inference",
    "suffix_length",
    "degree",
    "max_train_passes",
    "max_lemmatizer_passes",
    "max_useless_passes",
    "guess_mass",
    "beam",
    "beam_mass",
    "regularization",
    "delta",
    "sigma",
    "use_label_dictionary",
)

ENUM_FIELDS = {
    "estimator": Estimator,
    "inference": Inference,
    "regularization": Regularization,
}

FLOAT_FIELDS = ("guess_mass", "beam_mass", "delta", "sigma")

UNSETTABLE_FIELDS = ("beam", "beam_mass", "delta", "sigma")


def unset_to_none(value: Any) -> Any:
    """Map the -1 sentinel to None, leave anything else untouched."""
    if isinstance(value, (int, float)) and value == UNSET:
        return None
    return value


def float_eq(f1: float, f2: float) -> bool:
    """Compare two floats with the tolerance used for option equality."""
    return abs(f1 - f2) < FLOAT_TOLERANCE


class TaggerOptions(BaseModel):
    """Tagger hyperparameters"""

    model_config = ConfigDict(frozen=True)

    estimator: Estimator = Field(
        Estimator.AVG_PERC, description="Parameter estimation method"
    )
    inference: Inference = Field(Inference.MAP, description="Inference mode")
    suffix_length: int = Field(
        10, ge=0, description="Maximum suffix length used for guessing"
    )
    degree: int = Field(2, ge=0, description="Order of the label model")
    max_train_passes: int = Field(
        50, ge=0, description="Maximum number of training passes"
    )
    max_lemmatizer_passes: int = Field(
        50, ge=0, description="Maximum number of lemmatizer training passes"
    )
    max_useless_passes: int = Field(
        3, ge=0, description="Passes without improvement before stopping"
    )
    guess_mass: float = Field(
        0.99, ge=0, description="Probability mass kept for guessed labels"
    )
    beam: Optional[int] = Field(None, description="Beam width, None for no beam")
    beam_mass: Optional[float] = Field(
        None, description="Probability mass kept in the beam, None for no limit"
    )
    regularization: Regularization = Field(
        Regularization.NONE, description="Regularization type"
    )
    delta: Optional[float] = Field(None, description="Regularization step size")
    sigma: Optional[float] = Field(None, description="Regularization strength")
    use_label_dictionary: bool = Field(
        True, description="Restrict known words to labels seen in training"
    )

    __hash__ = None  # type: ignore[assignment]

    @field_validator(*UNSETTABLE_FIELDS, mode="before")
    @classmethod
    def map_unset_sentinel(cls, v):
        return unset_to_none(v)

    @classmethod
    def assemble(
        cls,
        overrides: Mapping[str, Any],
        base: Optional["TaggerOptions"] = None,
    ) -> "TaggerOptions":
        """Build a record from already coerced values without validation.

        Values start from `base` (or the defaults) and are replaced in the
        order given. The file loaders do their own range checking, and the
        binary path takes its input as-is, so pydantic validation is skipped
        here. A `-1` in an unsettable field still becomes `None`.
        """
        values = (base or cls()).model_dump()
        for name, value in overrides.items():
            if name in UNSETTABLE_FIELDS:
                value = unset_to_none(value)
            values[name] = value
        return cls.model_construct(**values)

    def is_set(self, name: str) -> bool:
        """True unless `name` is an unsettable field holding no value."""
        return getattr(self, name) is not None

    def to_wire_fields(self) -> Dict[str, float]:
        """Ordered field name to number mapping used by the binary format."""
        fields = {}
        for name in FIELD_ORDER:
            value = getattr(self, name)
            if value is None:
                value = UNSET
            fields[name] = float(value)
        return fields

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping with enum names and -1 for unset fields."""
        data = {}
        for name in FIELD_ORDER:
            value = getattr(self, name)
            if value is None:
                value = UNSET
            elif isinstance(value, IntEnum):
                value = value.name
            data[name] = value
        return data

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TaggerOptions):
            return NotImplemented

        mine = self.to_wire_fields()
        theirs = other.to_wire_fields()
        for name in FIELD_ORDER:
            if name in FLOAT_FIELDS:
                if not float_eq(mine[name], theirs[name]):
                    return False
            elif mine[name] != theirs[name]:
                return False
        return True
