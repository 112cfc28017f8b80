from diatoms._internal.introspection import ParameterInfo, TypeIntrospector
from diatoms.bindings import Binding, ClassName, Descriptor, Factory
from diatoms.container import Container
from diatoms.exceptions import ContainerError, InvalidBindingError, NotFoundError
from diatoms.lock_mode import LockMode

__all__ = [
    "Binding",
    "ClassName",
    "Container",
    "ContainerError",
    "Descriptor",
    "Factory",
    "InvalidBindingError",
    "LockMode",
    "NotFoundError",
    "ParameterInfo",
    "TypeIntrospector",
]
