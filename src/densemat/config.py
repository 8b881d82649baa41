"""
#######################################
Configuration (:mod:`densemat.config`)
#######################################

.. currentmodule:: densemat.config

Defaults shared by all matrices created in the active thread.

.. autosummary::
    :toctree: generated/

    Context
    getcontext
    localcontext
    setcontext

"""

import contextlib
import contextvars
from typing import Self

from densemat.precision import Float64, Precision


class Context:
    """Create a new context.

    Parameters
    ----------
    precision : type[Precision], default=Float64
        Backend of matrices whose precision is not given explicitly.
    mult_inner_switch : int, default=100
        Number of columns from which :func:`densemat.dense.mult.mult_inner` switches
        from the reordered to the small inner-product kernel.
    print_precision : int, default=6
        Number of significant digits used when a matrix is converted to a string.
    """

    __slots__ = ("_precision", "_mult_inner_switch", "_print_precision")
    _precision: type[Precision]
    _mult_inner_switch: int
    _print_precision: int

    def __init__(
        self,
        precision: type[Precision] = Float64,
        mult_inner_switch: int = 100,
        print_precision: int = 6,
    ):
        if not (isinstance(precision, type) and issubclass(precision, Precision)):
            raise TypeError

        if mult_inner_switch < 1 or print_precision < 1:
            raise ValueError

        self._precision = precision
        self._mult_inner_switch = mult_inner_switch
        self._print_precision = print_precision

    @property
    def precision(self) -> type[Precision]:
        return self._precision

    @property
    def mult_inner_switch(self) -> int:
        return self._mult_inner_switch

    @property
    def print_precision(self) -> int:
        return self._print_precision

    def copy(self) -> Self:
        return self.__class__(
            self._precision, self._mult_inner_switch, self._print_precision
        )

    def __repr__(self):
        return (
            f"{type(self).__name__}(precision={self._precision.__name__}, "
            f"mult_inner_switch={self._mult_inner_switch}, "
            f"print_precision={self._print_precision})"
        )

    def __copy__(self) -> Self:
        return self.copy()


_var: contextvars.ContextVar[Context] = contextvars.ContextVar("densemat")


def getcontext() -> Context:
    """Return the current context for the active thread."""
    if context := _var.get(None):
        return context

    context = Context()
    _var.set(context)
    return context


def setcontext(ctx: Context) -> None:
    """Set the current context for the active thread to `ctx`."""
    _var.set(ctx)


@contextlib.contextmanager
def localcontext(
    ctx: Context | None = None,
    *,
    precision: type[Precision] | None = None,
    mult_inner_switch: int | None = None,
    print_precision: int | None = None,
):
    """Return a context manager that will set the current context for the active thread
    to a copy of `ctx` on entry to the with-statement and restore the previous context
    when exiting the with-statement.

    Examples
    --------
    >>> from densemat.precision import Float32
    >>> with localcontext(precision=Float32) as ctx:
    ...     ctx.precision.bits
    32
    """
    if ctx is None:
        ctx = getcontext()

    ctx = Context(
        ctx._precision if precision is None else precision,
        ctx._mult_inner_switch if mult_inner_switch is None else mult_inner_switch,
        ctx._print_precision if print_precision is None else print_precision,
    )
    token = _var.set(ctx)

    try:
        yield ctx
    finally:
        _var.reset(token)
