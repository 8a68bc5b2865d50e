"""Decorators that wrap another decorator and alter its output."""

from __future__ import annotations

from typing import Callable, Optional

from termbars.decorator import Decorator, Statistics


class _Wrapper(Decorator):
    """Base for wrappers: width handling belongs to the wrapped decorator."""

    def __init__(self, decorator: Decorator) -> None:
        self._inner = decorator

    def format(self, text: str) -> tuple[str, int]:
        return self._inner.format(text)

    def sync(self):
        return self._inner.sync()


class MetaWrapper(_Wrapper):
    """Applies ``fn`` to the wrapped output, keeping its width."""

    def __init__(self, decorator: Decorator, fn: Callable[[str], str]) -> None:
        super().__init__(decorator)
        self._fn = fn

    def decor(self, stats: Statistics) -> tuple[str, int]:
        text, width = self._inner.decor(stats)
        return self._fn(text), width

    def unwrap(self) -> Decorator:
        """Return the wrapped decorator."""
        return self._inner


class OnAbortWrapper(_Wrapper):
    """Shows a message once the bar is aborted."""

    def __init__(self, decorator: Decorator, message: str) -> None:
        super().__init__(decorator)
        self._message = message

    def decor(self, stats: Statistics) -> tuple[str, int]:
        if stats.aborted:
            return self.format(self._message)
        return self._inner.decor(stats)

    def unwrap(self) -> Decorator:
        """Return the wrapped decorator."""
        return self._inner


class OnAbortMetaWrapper(_Wrapper):
    """Applies ``fn`` to the wrapped output once the bar is aborted."""

    def __init__(self, decorator: Decorator, fn: Callable[[str], str]) -> None:
        super().__init__(decorator)
        self._fn = fn

    def decor(self, stats: Statistics) -> tuple[str, int]:
        text, width = self._inner.decor(stats)
        if stats.aborted:
            return self._fn(text), width
        return text, width

    def unwrap(self) -> Decorator:
        """Return the wrapped decorator."""
        return self._inner


class OnCompleteWrapper(_Wrapper):
    """Shows a message once the bar is complete."""

    def __init__(self, decorator: Decorator, message: str) -> None:
        super().__init__(decorator)
        self._message = message

    def decor(self, stats: Statistics) -> tuple[str, int]:
        if stats.completed:
            return self.format(self._message)
        return self._inner.decor(stats)

    def unwrap(self) -> Decorator:
        """Return the wrapped decorator."""
        return self._inner


class OnCompleteMetaWrapper(_Wrapper):
    """Applies ``fn`` to the wrapped output once the bar is complete."""

    def __init__(self, decorator: Decorator, fn: Callable[[str], str]) -> None:
        super().__init__(decorator)
        self._fn = fn

    def decor(self, stats: Statistics) -> tuple[str, int]:
        text, width = self._inner.decor(stats)
        if stats.completed:
            return self._fn(text), width
        return text, width

    def unwrap(self) -> Decorator:
        """Return the wrapped decorator."""
        return self._inner


def meta(decorator: Optional[Decorator], fn: Callable[[str], str]) -> Optional[Decorator]:
    """Wrap ``decorator`` so that ``fn`` is applied to its output."""
    return None if decorator is None else MetaWrapper(decorator, fn)


def on_abort(decorator: Optional[Decorator], message: str) -> Optional[Decorator]:
    """Show ``message`` instead of ``decorator`` on abort."""
    return None if decorator is None else OnAbortWrapper(decorator, message)


def on_abort_meta(decorator: Optional[Decorator], fn: Callable[[str], str]) -> Optional[Decorator]:
    """Apply ``fn`` to ``decorator``'s output on abort."""
    return None if decorator is None else OnAbortMetaWrapper(decorator, fn)


def on_complete(decorator: Optional[Decorator], message: str) -> Optional[Decorator]:
    """Show ``message`` instead of ``decorator`` on completion."""
    return None if decorator is None else OnCompleteWrapper(decorator, message)


def on_complete_meta(
    decorator: Optional[Decorator], fn: Callable[[str], str]
) -> Optional[Decorator]:
    """Apply ``fn`` to ``decorator``'s output on completion."""
    return None if decorator is None else OnCompleteMetaWrapper(decorator, fn)


def on_complete_or_on_abort(decorator: Optional[Decorator], message: str) -> Optional[Decorator]:
    """Show ``message`` on completion or abort."""
    return on_complete(on_abort(decorator, message), message)


def on_complete_meta_or_on_abort_meta(
    decorator: Optional[Decorator], fn: Callable[[str], str]
) -> Optional[Decorator]:
    """Apply ``fn`` on completion or abort."""
    return on_complete_meta(on_abort_meta(decorator, fn), fn)


def conditional(cond: bool, a: Optional[Decorator], b: Optional[Decorator]) -> Optional[Decorator]:
    """Return ``a`` if ``cond`` is true, otherwise ``b``."""
    return a if cond else b


def predicative(
    predicate: Callable[[], bool], a: Optional[Decorator], b: Optional[Decorator]
) -> Optional[Decorator]:
    """Return ``a`` if ``predicate()`` is true, otherwise ``b``."""
    return a if predicate() else b


def on_condition(decorator: Optional[Decorator], cond: bool) -> Optional[Decorator]:
    """Return ``decorator`` only if ``cond`` is true."""
    return conditional(cond, decorator, None)


def on_predicate(
    decorator: Optional[Decorator], predicate: Callable[[], bool]
) -> Optional[Decorator]:
    """Return ``decorator`` only if ``predicate()`` is true."""
    return predicative(predicate, decorator, None)