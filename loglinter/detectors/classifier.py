"""
Call classification.

Decides whether a call expression is a logging call worth checking.
The receiver is resolved through declared types and imports, not by
its spelling: `slog.Info(...)` and `logger.Info(...)` with
`logger *zap.Logger` both match, `fmt.Info(...)` never does.
"""
from ..binding import Named, PkgName, Pointer, TypeInfo
from ..config import LOG_METHODS, LOGGER_PACKAGES
from ..syntax import CallExpr, Expr, Ident, SelectorExpr


def package_path(expr: Expr, type_info: TypeInfo) -> str:
    """
    Return the import path owning the receiver of a method call.

    - imported package name -> its import path
    - variable of type T or *T, T a named type -> the package declaring T
    - anything else -> ""
    """
    if not isinstance(expr, Ident):
        return ""

    obj = type_info.lookup(expr)
    if obj is None:
        return ""

    if isinstance(obj, PkgName):
        return obj.imported.path

    typ = obj.type
    if isinstance(typ, Pointer):
        typ = typ.elem
    if isinstance(typ, Named) and typ.package is not None:
        return typ.package.path

    return ""


def is_linted(call: CallExpr, type_info: TypeInfo) -> bool:
    """
    Check whether call is Info/Debug/Warn/Error/Fatal on log/slog or zap.

    Calls without arguments and calls that are not of the form
    `receiver.Method(...)` are never linted.
    """
    if not isinstance(call.fun, SelectorExpr):
        return False
    if not call.args:
        return False
    if call.fun.sel.name not in LOG_METHODS:
        return False

    return package_path(call.fun.x, type_info) in LOGGER_PACKAGES
