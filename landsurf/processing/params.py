# -*- coding: utf-8 -*-
"""
Tunable Parameter Annotations - Declarative constraints via typing.Annotated.

Processors declare their tunable parameters as class-body fields::

    class SpectralFilter(GridTransform):
        f_low: Annotated[float, Range(min=0.0), Desc('Lower cutoff')] = 0.0

``GridProcessor.__init_subclass__`` turns those declarations into
``ParamSpec`` records and, unless the class writes its own, a keyword-only
``__init__`` that validates each value.

Author
------
landsurf contributors

License
-------
MIT License
Copyright (c) 2026 landsurf contributors
See LICENSE file for full text.

Created
-------
2026-10-17

Modified
--------
2026-10-17
"""

# Standard library
import inspect
from typing import Annotated, Any, Optional, Tuple, Union, get_origin, get_type_hints

# landsurf internal
from landsurf.exceptions import ValidationError

Number = Union[int, float]


class ParamMeta:
    """Marker base class for parameter metadata inside ``Annotated``."""


class Range(ParamMeta):
    """Inclusive numeric bounds. Either bound may be omitted."""

    __slots__ = ('min', 'max')

    def __init__(self, min: Optional[Number] = None,
                 max: Optional[Number] = None) -> None:
        self.min = min
        self.max = max

    def __repr__(self) -> str:
        return f"Range(min={self.min!r}, max={self.max!r})"


class Desc(ParamMeta):
    """One-line description used in help text and logs."""

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


class ParamSpec:
    """Resolved declaration of one tunable parameter.

    Attributes
    ----------
    name : str
        Keyword-argument name.
    param_type : type
        Expected type. ``int`` is accepted where ``float`` is declared.
    default : Any
        Default value, or ``None`` when ``required`` is True.
    description : str
        Text from ``Desc``.
    min_value, max_value : int, float or None
        Inclusive bounds from ``Range``.
    """

    __slots__ = ('name', 'param_type', 'default', 'required', 'description',
                 'min_value', 'max_value')

    def __init__(self, name: str, param_type: type, default: Any,
                 required: bool, description: str = '',
                 min_value: Optional[Number] = None,
                 max_value: Optional[Number] = None) -> None:
        self.name = name
        self.param_type = param_type
        self.default = default
        self.required = required
        self.description = description
        self.min_value = min_value
        self.max_value = max_value

    def validate(self, value: Any) -> None:
        """Check *value* against the declared type and constraints.

        Raises
        ------
        TypeError
            If *value* has the wrong type.
        ValidationError
            If *value* is out of range.
        """
        expected = (int, float) if self.param_type is float else self.param_type
        wrong_type = not isinstance(value, expected)
        if isinstance(value, bool) and self.param_type is not bool:
            wrong_type = True
        if self.param_type is not object and wrong_type:
            raise TypeError(
                f"Parameter '{self.name}' must be "
                f"{self.param_type.__name__}, got {type(value).__name__}"
            )
        if self.min_value is not None and value < self.min_value:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is below minimum {self.min_value!r}"
            )
        if self.max_value is not None and value > self.max_value:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is above maximum {self.max_value!r}"
            )

    def __repr__(self) -> str:
        return (f"ParamSpec(name={self.name!r}, "
                f"param_type={self.param_type.__name__}, "
                f"default={self.default!r})")


def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Build ``ParamSpec`` records from the ``Annotated`` fields of *cls*.

    Fields are ordered parent-first, then by declaration order.
    """
    hints = get_type_hints(cls, include_extras=True)

    names = []
    for klass in reversed(cls.__mro__):
        for name in getattr(klass, '__annotations__', {}):
            if name in hints and name not in names:
                names.append(name)

    specs = []
    for name in names:
        hint = hints[name]
        if get_origin(hint) is not Annotated:
            continue
        metas = [m for m in hint.__metadata__ if isinstance(m, ParamMeta)]
        if not metas:
            continue
        bounds = next((m for m in metas if isinstance(m, Range)), None)
        desc = next((m for m in metas if isinstance(m, Desc)), None)
        default = getattr(cls, name, inspect.Parameter.empty)
        required = default is inspect.Parameter.empty
        specs.append(ParamSpec(
            name=name,
            param_type=hint.__args__[0],
            default=None if required else default,
            required=required,
            description=desc.text if desc else '',
            min_value=bounds.min if bounds else None,
            max_value=bounds.max if bounds else None,
        ))
    return tuple(specs)


def make_init(param_specs: Tuple[ParamSpec, ...]):
    """Return a keyword-only ``__init__`` that validates and stores params.

    The generated initializer calls ``self.__post_init__()`` when the class
    defines one.
    """
    def __init__(self, **kwargs):
        unexpected = set(kwargs) - {s.name for s in param_specs}
        if unexpected:
            raise TypeError(
                f"{type(self).__name__}() got unexpected "
                f"keyword arguments: {', '.join(sorted(unexpected))}"
            )
        for spec in param_specs:
            if spec.name in kwargs:
                value = kwargs[spec.name]
            elif spec.required:
                raise TypeError(
                    f"{type(self).__name__}() missing required "
                    f"keyword argument: '{spec.name}'"
                )
            else:
                value = spec.default
            spec.validate(value)
            setattr(self, spec.name, value)
        if hasattr(self, '__post_init__'):
            self.__post_init__()

    params = [inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    for spec in param_specs:
        params.append(inspect.Parameter(
            spec.name, inspect.Parameter.KEYWORD_ONLY,
            default=inspect.Parameter.empty if spec.required else spec.default,
        ))
    __init__.__signature__ = inspect.Signature(params)
    __init__.__qualname__ = '__init__'
    return __init__
