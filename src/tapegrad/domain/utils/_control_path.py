"""
State-based method dispatch (a.k.a. "control-path" templating) via decorators.

This module provides a small mechanism for routing a single method call to one
of several registered implementations based on the runtime `_state` of the
objects taking part in the call.

Core idea
---------
- You define a *base* method on a class (its signature becomes the canonical one).
- You then register multiple "control paths" for that method, each keyed by:
    (ClassName, MethodName, StateVal)
- At runtime, the wrapper collects the `_state` of the receiver and of every
  positional argument that has one, in order, and dispatches to the
  implementation registered under that tuple.

For the tensor core this means a unary recording method dispatches on
``(Tracking.TRACKED,)`` or ``(Tracking.UNTRACKED,)``, and a binary one on the
four combinations of two tracking tags.

Important notes
---------------
- This design mutates the class: the first time you decorate a control path,
  the original method name is replaced with a wrapper that performs dispatch.
- Registered implementations are stored in a closure-local mapping owned by
  `create_path_builder()`. Different builders do not share mappings.
- The selected implementation is called like a normal instance method,
  i.e. ``sub_method(self, *args, **kwargs)``.
"""

from typing import (
    runtime_checkable,
    Callable,
    Hashable,
    Optional,
    Protocol,
    Union,
    Dict,
    Type,
    Any,
)
from typing_extensions import ParamSpec, TypeVar
from collections import namedtuple
from functools import wraps

from abc import abstractmethod

P = ParamSpec("P")
R = TypeVar("R")


def create_path_builder() -> Callable[
    [
        Type,
        Callable[P, R],
        Hashable,
        Optional[Union[Exception, Callable[[Callable[P, R], Any], None]]],
    ],
    Callable[[Callable[P, R]], Callable[P, R]],
]:
    """
    Create and return a "path builder" function used to register stateful
    control paths for methods.

    The returned function (`templator`) is used like this:

        decorator = create_path_builder()

        class Value:
            def combine(self, other): ...

        @decorator(Value, Value.combine, state=("A", "B"))
        def combine_a_b(self, other):
            ...

    When `a.combine(b)` is called, it dispatches on ``(a._state, b._state)``.

    Returns
    -------
    Callable
        A function with signature:

            (cls, method, state, trap_exception=None) -> decorator

        where `decorator(sub_method)` registers `sub_method` for that control path
        and replaces `cls.method` with a dispatcher wrapper.
    """

    MethodKey = namedtuple(
        "MethodKey",
        [
            "ClassName",
            "MethodName",
            "StateVal",
        ],
    )
    """Tuple-like key used to uniquely identify a control path."""

    methods_map: Dict[MethodKey, Callable] = {}
    """Mapping from (class, method, state) keys to registered implementations."""

    @runtime_checkable
    class StatefulObject(Protocol):
        """
        Protocol describing an object that participates in state-based dispatch.

        Implementers must provide a `_state` property. The dispatcher reads it
        on the receiver and on every positional argument that provides it.
        """

        @property
        @abstractmethod
        def _state(self) -> Optional[Any]:
            """Current state value used for dispatch selection."""
            ...

    STATE_PROPERTY_NAME = next(
        (
            name
            for name, value in StatefulObject.__dict__.items()
            if value is StatefulObject._state
        )
    )
    """Name of the state property, used for clearer error messages."""

    def _runtime_state(self: Any, args: tuple) -> tuple:
        """
        Collect the dispatch state for one call.

        Parameters
        ----------
        self : Any
            The receiver of the call.
        args : tuple
            Positional arguments of the call.

        Returns
        -------
        tuple
            `_state` of the receiver followed by the `_state` of every
            positional argument that is a `StatefulObject`.
        """
        return (self._state,) + tuple(
            a._state for a in args if isinstance(a, StatefulObject)
        )

    def templator(
        cls: Type,
        method: Callable[P, R],
        state: Hashable,
        trap_exception: Optional[
            Union[Exception, Callable[[Callable[P, R], Any], None]]
        ] = None,
    ) -> Callable[[Callable[P, R]], Callable[P, R]]:
        """
        Build a decorator that registers a control path implementation.

        Parameters
        ----------
        cls : Type
            The class whose method should be wrapped for state-based dispatch.
            The wrapper is installed on this class under `method.__name__`.
        method : Callable[P, R]
            The base method being templated. Its name and docstring are kept
            on the installed wrapper via `functools.wraps(method)`.
        state : Hashable
            The state tuple that selects the decorated implementation.
            A non-tuple state is treated as a one-element tuple.
        trap_exception : Optional[Union[Exception, Callable[[Callable[P, R], Any], None]]]
            Controls what happens when a dispatch target is missing:

            - If `None`, the wrapper raises `NotImplementedError`.
            - If an exception class, the wrapper raises `trap_exception()`.
            - If another callable, it is invoked as
              `trap_exception(method, state)` before raising `trap_exception()`.

        Returns
        -------
        Callable[[Callable[P, R]], Callable[P, R]]
            A decorator that registers `sub_method` for `(cls, method, state)`
            and installs the dispatcher wrapper on `cls`.

        Raises
        ------
        TypeError
            If `state` is not hashable.
        """
        try:
            hash(state)
        except TypeError:
            raise TypeError(
                f"The argument for 'state' must be hashable. Got {repr(state)}"
            )

        if not isinstance(state, tuple):
            state = (state,)

        smk: MethodKey = MethodKey(cls.__name__, method.__name__, state)
        """Static method key for the control path being registered by this call."""

        def decorator(sub_method: Callable[P, R]) -> Callable[P, R]:
            """
            Register `sub_method` as the implementation for the configured state.

            Parameters
            ----------
            sub_method : Callable[P, R]
                The implementation to run when the runtime state equals `state`.

            Returns
            -------
            Callable[P, R]
                The original `sub_method` (returned unchanged), enabling normal
                decorator stacking and direct calls in tests.
            """
            methods_map[smk] = sub_method

            @wraps(method)
            def wrapper(self: Any, *args: P.args, **kwargs: P.kwargs) -> Any:
                """
                Dispatch to a registered implementation based on operand states.

                Behavior
                --------
                - If `self` does not satisfy `StatefulObject`, raises
                  `NotImplementedError` naming the missing state property.
                - If a matching control path exists, calls it with `self`
                  bound and returns its result.
                - Otherwise applies `trap_exception` (see `templator`).
                """
                if not isinstance(self, StatefulObject):
                    raise NotImplementedError(
                        "{} is missing attribute {} (@property)".format(
                            type(self), repr(STATE_PROPERTY_NAME)
                        )
                    )
                cur_state = _runtime_state(self, args)
                key = MethodKey(cls.__name__, method.__name__, cur_state)
                if sm := methods_map.get(key):
                    return sm(self, *args, **kwargs)
                if not trap_exception:
                    raise NotImplementedError(
                        "Missing control path (state={}) for {}".format(
                            repr(cur_state), repr(method.__name__)
                        )
                    )
                if isinstance(trap_exception, type):
                    raise trap_exception()
                trap_exception(method, cur_state)
                raise trap_exception()

            setattr(cls, method.__name__, wrapper)
            return sub_method

        return decorator

    return templator
