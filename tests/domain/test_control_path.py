import unittest

from tapegrad.domain.utils import create_path_builder


class _Stateful:
    def __init__(self, st):
        self.__st = st

    @property
    def _state(self):
        return self.__st


class TestCreatePathBuilder(unittest.TestCase):
    def setUp(self) -> None:
        # Fresh builder per test to avoid map-sharing across tests.
        self.decorator = create_path_builder()

    def test_state_must_be_hashable(self) -> None:
        class C(_Stateful):
            def foo(self, x: int) -> int:
                return x

        with self.assertRaises(TypeError) as ctx:
            # list is unhashable
            self.decorator(C, C.foo, state=["not-hashable"])(lambda self, x: x)

        self.assertIn("must be hashable", str(ctx.exception))

    def test_dispatch_selects_registered_control_path(self) -> None:
        class C(_Stateful):
            def foo(self, x: int) -> int:
                # base implementation never used once wrapper installed
                return -999

        @self.decorator(C, C.foo, state="A")
        def foo_A(self, x: int) -> int:
            return x + 10

        @self.decorator(C, C.foo, state="B")
        def foo_B(self, x: int) -> int:
            return x + 20

        self.assertEqual(C("A").foo(1), 11)
        self.assertEqual(C("B").foo(1), 21)

    def test_control_path_receives_self(self) -> None:
        class C(_Stateful):
            def foo(self) -> "C":
                return None

        @self.decorator(C, C.foo, state="A")
        def foo_A(self) -> "C":
            return self

        c = C("A")
        self.assertIs(c.foo(), c)

    def test_dispatch_includes_state_of_positional_arguments(self) -> None:
        class C(_Stateful):
            def combine(self, other: "C", tag: str) -> str:
                return "base"

        @self.decorator(C, C.combine, state=("A", "A"))
        def combine_aa(self, other, tag):
            return "aa:" + tag

        @self.decorator(C, C.combine, state=("A", "B"))
        def combine_ab(self, other, tag):
            return "ab:" + tag

        @self.decorator(C, C.combine, state=("B", "A"))
        def combine_ba(self, other, tag):
            return "ba:" + tag

        a, b = C("A"), C("B")
        self.assertEqual(a.combine(a, "x"), "aa:x")
        self.assertEqual(a.combine(b, "x"), "ab:x")
        self.assertEqual(b.combine(a, "y"), "ba:y")

        with self.assertRaises(NotImplementedError) as ctx:
            b.combine(b, "z")
        self.assertIn("('B', 'B')", str(ctx.exception))

    def test_keyword_arguments_do_not_contribute_state(self) -> None:
        class C(_Stateful):
            def combine(self, other=None) -> str:
                return "base"

        @self.decorator(C, C.combine, state="A")
        def combine_a(self, other=None):
            return "unary"

        a = C("A")
        self.assertEqual(a.combine(other=C("B")), "unary")

    def test_dispatch_supports_none_state(self) -> None:
        class C(_Stateful):
            def foo(self, x: int) -> int:
                return -999

        @self.decorator(C, C.foo, state=None)
        def foo_none(self, x: int) -> int:
            return x * 2

        self.assertEqual(C(None).foo(3), 6)

    def test_missing_state_property_raises_not_implemented(self) -> None:
        class C:
            # No _state property on purpose
            def foo(self, x: int) -> int:
                return x

        # Registering a control path will install the wrapper on C.foo
        @self.decorator(C, C.foo, state="A")
        def foo_A(self, x: int) -> int:
            return x + 1

        obj = C()
        with self.assertRaises(NotImplementedError) as ctx:
            obj.foo(1)

        # Should mention missing attribute and the property name ('_state')
        self.assertIn("missing attribute", str(ctx.exception))
        self.assertIn("'_state'", str(ctx.exception))

    def test_missing_control_path_without_trap_exception_raises_not_implemented(
        self,
    ) -> None:
        class C(_Stateful):
            def foo(self, x: int) -> int:
                return x

        @self.decorator(C, C.foo, state="A")
        def foo_A(self, x: int) -> int:
            return x + 1

        obj = C("B")  # no registered path
        with self.assertRaises(NotImplementedError) as ctx:
            obj.foo(1)

        self.assertIn("Missing control path", str(ctx.exception))
        self.assertIn("state=('B',)", str(ctx.exception))
        self.assertIn("'foo'", str(ctx.exception))

    def test_trap_exception_as_exception_class_raises_that_exception(self) -> None:
        class MissingPathError(Exception):
            pass

        class C(_Stateful):
            def foo(self, x: int) -> int:
                return x

        @self.decorator(C, C.foo, state="A", trap_exception=MissingPathError)
        def foo_A(self, x: int) -> int:
            return x + 1

        with self.assertRaises(MissingPathError):
            C("B").foo(1)

    def test_trap_exception_callable_is_called_and_then_raised(self) -> None:
        """
        A callable (non-class) trap is invoked as ``trap(method, state)`` for
        side effects, then ``trap()`` is raised, so it must also return an
        exception instance when called without arguments.
        """

        class MyRaisedError(Exception):
            pass

        calls = {"count": 0, "method_name": None, "state": None}

        class TrapFactory:
            def __call__(self, *args):
                if len(args) == 2:
                    calls["count"] += 1
                    calls["method_name"] = getattr(args[0], "__name__", None)
                    calls["state"] = args[1]
                    return None
                return MyRaisedError("boom")

        class C(_Stateful):
            def foo(self, x: int) -> int:
                return x

        @self.decorator(C, C.foo, state="A", trap_exception=TrapFactory())
        def foo_A(self, x: int) -> int:
            return x + 1

        with self.assertRaises(MyRaisedError) as ctx:
            C("B").foo(123)

        self.assertEqual(calls["count"], 1)
        self.assertEqual(calls["method_name"], "foo")
        self.assertEqual(calls["state"], ("B",))
        self.assertIn("boom", str(ctx.exception))

    def test_wrapper_preserves_original_method_metadata(self) -> None:
        class C(_Stateful):
            def foo(self, x: int) -> int:
                """Original foo docstring."""
                return x

        @self.decorator(C, C.foo, state="A")
        def foo_A(self, x: int) -> int:
            return x + 1

        self.assertEqual(C.foo.__name__, "foo")
        self.assertEqual(C.foo.__doc__, "Original foo docstring.")

    def test_decorator_returns_sub_method_unchanged(self) -> None:
        class C(_Stateful):
            def foo(self, x: int) -> int:
                return x

        def foo_A(self, x: int) -> int:
            return x + 1

        self.assertIs(self.decorator(C, C.foo, state="A")(foo_A), foo_A)

    def test_two_builders_do_not_share_control_paths(self) -> None:
        deco1 = create_path_builder()
        deco2 = create_path_builder()

        class C(_Stateful):
            def foo(self, x: int) -> int:
                return -999

        @deco1(C, C.foo, state="A")
        def foo_A_1(self, x: int) -> int:
            return 111

        # Overwrite the wrapper with deco2's installation
        @deco2(C, C.foo, state="B")
        def foo_B_2(self, x: int) -> int:
            return 222

        # The installed wrapper consults deco2's map only.
        with self.assertRaises(NotImplementedError):
            C("A").foo(0)

        self.assertEqual(C("B").foo(0), 222)


if __name__ == "__main__":
    unittest.main()
