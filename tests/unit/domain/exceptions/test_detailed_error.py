# tests/unit/domain/exceptions/test_detailed_error.py
from __future__ import annotations

import inspect

import pytest

from xcp.domain.exceptions.base import DataField, DetailedError

TEST_MESSAGE = "Test error message"
INNER_TEST_MESSAGE = "Test inner message"
TEST_ERROR_CODE = "TEST_ERROR_CODE"
TEST_CONTEXT = "Test context"
TEST_MEMBER_NAME = "test_method"
TEST_LINE_NUMBER = "42"


def test_constructor_with_message_leaves_fields_unset() -> None:
    """A message-only DetailedError has no code, origin or cause."""
    exc = DetailedError(TEST_MESSAGE)

    assert exc.message == TEST_MESSAGE
    assert str(exc) == TEST_MESSAGE
    assert exc.code is None
    assert exc.context is None
    assert exc.member is None
    assert exc.line is None
    assert exc.cause is None
    assert exc.data == {}


def test_constructor_with_message_and_cause_links_chain() -> None:
    """The cause is exposed both as .cause and as the native __cause__."""
    inner = ValueError(INNER_TEST_MESSAGE)

    exc = DetailedError(TEST_MESSAGE, inner)

    assert exc.message == TEST_MESSAGE
    assert exc.cause is inner
    assert exc.__cause__ is inner
    assert exc.code is None


def test_constructor_without_message_raises_type_error() -> None:
    """The base type has no default message."""
    with pytest.raises(TypeError, match="message"):
        DetailedError()

    with pytest.raises(TypeError, match="message"):
        DetailedError(ValueError("only a cause"))


def test_constructor_rejects_unknown_field() -> None:
    """Only declared DataField names are accepted as keyword fields."""
    with pytest.raises(TypeError, match="param"):
        DetailedError(TEST_MESSAGE, param="p")


def test_keyword_fields_are_stored_in_call_order() -> None:
    """Keyword fields land in data in the order the caller wrote them."""
    exc = DetailedError(
        TEST_MESSAGE,
        line=TEST_LINE_NUMBER,
        code=TEST_ERROR_CODE,
        context=TEST_CONTEXT,
        data={"CustomKey": "CustomValue"},
    )

    assert list(exc.data) == ["Line", "Code", "Context", "CustomKey"]
    assert exc.code == TEST_ERROR_CODE


@pytest.mark.parametrize(
    ("name", "key", "value"),
    [
        ("code", "Code", TEST_ERROR_CODE),
        ("context", "Context", TEST_CONTEXT),
        ("member", "Member", TEST_MEMBER_NAME),
        ("line", "Line", TEST_LINE_NUMBER),
    ],
)
def test_reserved_accessors_round_trip_through_data(name: str, key: str, value: str) -> None:
    """Reserved accessors are views over data under their reserved key."""
    exc = DetailedError(TEST_MESSAGE)

    setattr(exc, name, value)

    assert getattr(exc, name) == value
    assert exc.data[key] == value

    exc.data[key] = "changed"
    assert getattr(exc, name) == "changed"

    delattr(exc, name)
    assert key not in exc.data
    assert getattr(exc, name) is None


def test_accessor_round_trip_keeps_value_identity() -> None:
    """Values are stored as given, without normalisation."""
    exc = DetailedError(TEST_MESSAGE)
    value = "  padded  "

    exc.context = value

    assert exc.context is value


def test_data_field_descriptor_is_visible_on_class() -> None:
    """Class-level access returns the descriptor itself."""
    assert isinstance(DetailedError.code, DataField)
    assert DetailedError.code.key == "Code"
    assert DetailedError.code.name == "code"


def test_with_data_merges_and_returns_self() -> None:
    """with_data updates the mapping in order and supports chaining into raise."""
    exc = DetailedError(TEST_MESSAGE, code=TEST_ERROR_CODE)

    result = exc.with_data({"First": 1}, Second="two")

    assert result is exc
    assert list(exc.data.items()) == [("Code", TEST_ERROR_CODE), ("First", 1), ("Second", "two")]


def test_at_call_site_fills_origin_from_caller() -> None:
    """at_call_site records module, function and line of the calling frame."""
    expected_line = inspect.currentframe().f_lineno + 1  # type: ignore[union-attr]
    exc = DetailedError(TEST_MESSAGE).at_call_site()

    assert exc.context == __name__
    assert exc.member == "test_at_call_site_fills_origin_from_caller"
    assert exc.line == str(expected_line)


def test_at_call_site_qualifies_context_with_class_for_methods() -> None:
    """Inside a method, the owning class is appended to the module name."""

    class Repository:
        def close(self) -> DetailedError:
            return DetailedError(TEST_MESSAGE).at_call_site()

    exc = Repository().close()

    assert exc.context == f"{__name__}.{Repository.__qualname__}"
    assert exc.member == "close"


def test_at_call_site_stacklevel_skips_helpers() -> None:
    """stacklevel=2 attributes the error to the helper's caller."""

    def _fail() -> DetailedError:
        return DetailedError(TEST_MESSAGE).at_call_site(stacklevel=2)

    exc = _fail()

    assert exc.member == "test_at_call_site_stacklevel_skips_helpers"


def test_raise_from_overrides_cause() -> None:
    """Native `raise ... from ...` chaining is reflected by .cause."""
    inner = KeyError("missing")

    with pytest.raises(DetailedError) as info:
        raise DetailedError(TEST_MESSAGE) from inner

    assert info.value.cause is inner


def test_is_an_exception() -> None:
    """DetailedError can be caught as a plain Exception."""
    exc = DetailedError(TEST_MESSAGE)

    assert isinstance(exc, Exception)
