import pytest

from linkstack import EmptyStackError, Stack, StackNode


def test_construct_empty():
    stack = Stack()

    assert stack.top is None
    assert stack.is_empty()


@pytest.mark.parametrize("value", [5, "foo", 0, "", [1, 2], None])
def test_construct_with_value(value):
    stack = Stack(value)

    assert not stack.is_empty()
    assert stack.peek() == value
    assert isinstance(stack.top, StackNode)
    assert stack.top.next is None


def test_construct_with_none_is_not_empty():
    stack = Stack(None)

    assert not stack.is_empty()
    assert stack.pop() is None
    assert stack.is_empty()


def test_pop_removes_top_item():
    stack = Stack("foo")
    stack.push("bar")
    assert stack.top.value == "bar"

    assert stack.pop() == "bar"
    assert stack.top.value == "foo"
    assert stack.peek() == "foo"


def test_pop_returns_value_and_empties():
    stack = Stack(42)

    assert stack.pop() == 42
    assert stack.is_empty()
    assert stack.top is None


def test_push_changes_top():
    stack = Stack("foo")
    assert stack.top.value == "foo"

    stack.push("bar")
    assert stack.top.value == "bar"
    assert stack.peek() == "bar"
    assert not stack.is_empty()


def test_push_links_to_original_top():
    stack = Stack("foo")
    original_top = stack.top

    stack.push("bar")
    assert stack.top.next is original_top


def test_push_onto_empty_stack():
    stack = Stack()
    stack.push(1)

    assert stack.peek() == 1
    assert stack.top.next is None


def test_push_then_pop_restores_state():
    stack = Stack("foo")
    stack.push("bar")
    top_before = stack.top

    stack.push("baz")
    stack.pop()

    assert stack.top is top_before
    assert stack.peek() == "bar"
    assert not stack.is_empty()


def test_push_then_pop_on_empty_stack():
    stack = Stack()
    stack.push("foo")
    stack.pop()

    assert stack.top is None
    assert stack.is_empty()


def test_lifo_order():
    values = list(range(10))
    stack = Stack()
    for value in values:
        stack.push(value)

    popped = [stack.pop() for _ in values]
    assert popped == values[::-1]
    assert stack.is_empty()


def test_peek_does_not_mutate():
    stack = Stack(42)
    top = stack.top

    assert stack.peek() == 42
    assert stack.peek() == 42
    assert stack.top is top


def test_pop_empty_raises():
    stack = Stack()

    with pytest.raises(EmptyStackError, match="'pop' called on an empty stack"):
        stack.pop()


def test_peek_empty_raises():
    stack = Stack()

    with pytest.raises(EmptyStackError, match="'peek'"):
        stack.peek()


def test_pop_after_draining_raises():
    stack = Stack(1)
    stack.pop()

    with pytest.raises(EmptyStackError):
        stack.pop()

    # the failed pop leaves the stack usable
    stack.push(2)
    assert stack.pop() == 2


def test_empty_stack_error_is_an_index_error():
    with pytest.raises(IndexError):
        Stack().peek()


def test_long_chain_does_not_recurse():
    stack = Stack()
    for value in range(10_000):
        stack.push(value)

    assert repr(stack) == "Stack(top=9999)"
    assert repr(stack.top) == "StackNode(value=9999)"
    assert stack.top != stack.top.next


def test_repr_empty():
    assert repr(Stack()) == "Stack()"
