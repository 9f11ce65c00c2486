"""
    Implements a read-only descriptor class with runtime type checking and
    optional value validation, used for the public attributes of size hints
    and adaptors.
"""

# Copyright (C) 2023 Hashberg Ltd

# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation; either
# version 2.1 of the License, or (at your option) any later version.

# This library is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.

# You should have received a copy of the GNU Lesser General Public
# License along with this library; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301
# USA

from __future__ import annotations
from typing import Any, Generic, Protocol, Type, TypeVar, Union, cast, final, overload

from typing_validation import can_validate, validate

T = TypeVar("T")
""" Invariant type variable for generic objects. """

T_contra = TypeVar("T_contra", contravariant=True)
""" Contravariant type variable for generic objects. """

class FieldValidator(Protocol[T_contra]):
    """
        Structural type for validator functions of a field.
    """

    def __call__(self, instance: Any, value: T_contra) -> bool:
        """
            Validates the given value for the field, in the context of the
            given instance.

            Called passing the current ``instance`` and the ``value`` that is
            to be set. At the time when the validator is invoked, the given
            ``value`` has already passed its runtime typecheck, and fields
            set earlier on the same instance can be read.
        """

class Field(Generic[T]):
    """
        A read-only field of a size hint or adaptor, which includes:

        - static type checking for the field value;
        - runtime type checking, using :func:`typing_validation.validate`;
        - optional runtime validation;
        - set-once semantics: the field is set during construction, and can
          neither be re-assigned nor deleted afterwards.

        The field is backed by a protected attribute, obtained from the
        field name by prepending an underscore. Owner classes with
        ``__slots__`` must declare the backing attribute. Owners update
        their own state by writing to the backing attribute directly,
        which bypasses the read-only check.
    """

    __name: str
    __attr_name: str
    __owner: Type[Any]
    __type: Any
    __validator: Union[FieldValidator[T], None]
    __error_msg: Union[str, None]

    __slots__ = ("__name", "__attr_name", "__owner", "__type",
                 "__validator", "__error_msg")

    def __init__(self, ty: Any,
                 validator: Union[FieldValidator[T], None] = None,
                 error_msg: Union[str, None] = None) -> None:
        """
            Creates a new field with the given type and optional validator.

            :param ty: the type of the field
            :param validator: an optional validator function for the field
            :param error_msg: an optional message appended to the error
                              raised when the validator fails

            :raises TypeError: if the type cannot be validated at runtime
            :raises TypeError: if the validator is not callable

            :meta public:
        """
        if not can_validate(ty):
            raise TypeError(f"Cannot validate type {ty!r}.")
        if validator is not None and not callable(validator):
            raise TypeError(f"Expected callable validator, got {validator!r}.")
        self.__type = ty
        self.__validator = validator
        self.__error_msg = error_msg

    @final
    @property
    def name(self) -> str:
        """
            The name of the field.
        """
        return self.__name

    @final
    @property
    def type(self) -> Any:
        """
            The type of the field.
        """
        return self.__type

    @final
    @property
    def owner(self) -> Type[Any]:
        """
            The class that owns the field.
        """
        return self.__owner

    @final
    @property
    def validator(self) -> Union[FieldValidator[T], None]:
        """
            The custom validator function for the field,
            or :obj:`None` if no validator was specified.
        """
        return self.__validator

    @final
    def is_defined_on(self, instance: Any) -> bool:
        """
            Whether the field has been set on the given instance.
        """
        return hasattr(instance, self.__attr_name)

    @final
    def __set_name__(self, owner: Type[Any], name: str) -> None:
        """
            Hook called when the field is assigned to a class attribute.
            Sets the name for the field and checks the backing attribute.
        """
        attr_name = f"_{name}"
        if hasattr(owner, "__slots__") and attr_name not in owner.__slots__:
            raise AttributeError(
                f"Protected attribute {attr_name!r} must be defined in __slots__."
            )
        self.__owner = owner
        self.__name = name
        self.__attr_name = attr_name

    @overload
    def __get__(self, instance: None, _: Type[Any]) -> Field[T]:
        ...

    @overload
    def __get__(self, instance: Any, _: Type[Any]) -> T:
        ...

    @final
    def __get__(self, instance: Any, _: Type[Any]) -> Union[T, Field[T]]:
        """
            Gets the value of the field on the given instance, or the field
            itself when accessed on the owner class.

            :raises AttributeError: if the field is not set

            :meta public:
        """
        if instance is None:
            return self
        try:
            return cast(T, getattr(instance, self.__attr_name))
        except AttributeError:
            pass
        owner_name = self.__owner.__name__
        raise AttributeError(f"{owner_name!r} object has no attribute {self.name!r}")

    @final
    def __set__(self, instance: Any, value: T) -> None:
        """
            Sets the value of the field on the given instance.

            :raises TypeError: if the value has the wrong type
            :raises ValueError: if a validator is specified and the
                                value is invalid
            :raises AttributeError: if the field is already set

            :meta public:
        """
        if self.is_defined_on(instance):
            raise AttributeError(
                f"Attribute {self.name!r} is readonly: it can only be set once."
            )
        validate(value, self.type)
        validator = self.__validator
        if validator is not None and not validator(instance, value):
            raise ValueError(
                f"Invalid value for attribute {self.name!r}: {value!r}."
                + (
                    f" {self.__error_msg}"
                    if self.__error_msg is not None
                    else ""
                )
            )
        setattr(instance, self.__attr_name, value)

    @final
    def __delete__(self, instance: Any) -> None:
        """
            Fields are read-only and cannot be deleted.

            :raises AttributeError: always

            :meta public:
        """
        raise AttributeError(
            f"Attribute {self.name!r} is readonly: it cannot be deleted."
        )
