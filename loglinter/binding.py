"""
Symbol bindings supplied by declaration resolution.

An identifier occurrence resolves to an object: either an imported
package name, or a variable with a (possibly unknown) declared type.
Types model just enough of Go's type system for receiver resolution:
basic types, named types owned by a package, and pointers.

All structures are immutable.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Union


@dataclass(frozen=True)
class Package:
    path: str
    name: str


@dataclass(frozen=True)
class Basic:
    """A predeclared type such as int or string."""
    name: str


@dataclass(frozen=True)
class Named:
    """A defined type. `package` is None for universe-scope types like error."""
    package: Optional[Package]
    name: str


@dataclass(frozen=True)
class Pointer:
    elem: "Type"


Type = Union[Basic, Named, Pointer]


@dataclass(frozen=True)
class PkgName:
    """An identifier bound to an import."""
    name: str
    imported: Package


@dataclass(frozen=True)
class Var:
    """An identifier bound to a variable, parameter or receiver."""
    name: str
    type: Optional[Type] = None


Object = Union[PkgName, Var]


@dataclass(frozen=True)
class TypeInfo:
    """
    Read-only use-to-declaration mapping.

    Keys are identifier occurrences (compared by identity), values the
    object each occurrence refers to.
    """
    uses: Dict[object, Object] = field(default_factory=dict)

    def lookup(self, ident) -> Optional[Object]:
        return self.uses.get(ident)
