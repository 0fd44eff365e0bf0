"""Property-based tests using Hypothesis for iteration policies."""

import io

from hypothesis import given, strategies as st
from hypothesis.stateful import RuleBasedStateMachine, invariant, rule

from iterman.lists.base import EXHAUSTED
from iterman.lists.buffer_list import BufferList
from iterman.lists.memory_list import MemoryList
from iterman.manager import ListManager

# Lines without terminators so they survive a newline-joined round trip
line_text = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",), blacklist_characters="\r\n"),
    max_size=20,
)


class TestMemoryListProperties:
    """Properties of memory-backed lists."""

    @given(st.lists(st.integers(), min_size=1, max_size=20), st.integers(0, 100))
    def test_round_robin_is_modular(self, items, pulls):
        """Test that pull i returns items[i mod len]."""
        cycling = MemoryList.new_round_robin(items)
        for i in range(pulls):
            assert cycling.pull() == items[i % len(items)]

    @given(st.lists(st.integers(), max_size=20), st.integers(1, 10))
    def test_exhaust_once_yields_all_then_stops(self, items, extra):
        """Test that the sequence comes out once, then exhaustion forever."""
        once = MemoryList(items)
        assert [once.pull() for _ in range(len(items))] == items
        for _ in range(extra):
            assert once.pull() is EXHAUSTED

    @given(st.integers(0, 20))
    def test_empty_round_robin_never_yields(self, pulls):
        """Test that an empty round-robin list stays exhausted."""
        cycling = MemoryList.new_round_robin([])
        assert all(cycling.pull() is EXHAUSTED for _ in range(pulls))


class TestBufferListProperties:
    """Properties of stream-backed lists."""

    @given(st.lists(line_text, min_size=1, max_size=20))
    def test_lines_come_back_in_order(self, lines):
        """Test reading newline-terminated text."""
        data = "".join(f"{line}\n" for line in lines).encode("utf-8")
        assert list(BufferList(io.BytesIO(data))) == lines

    @given(st.lists(line_text, min_size=1, max_size=10), st.integers(0, 50))
    def test_round_robin_matches_memory_list(self, lines, pulls):
        """Test that both backends cycle identically."""
        data = "".join(f"{line}\n" for line in lines).encode("utf-8")
        from_stream = BufferList.new_round_robin(io.BytesIO(data))
        from_memory = MemoryList.new_round_robin(lines)
        for _ in range(pulls):
            assert from_stream.pull() == from_memory.pull()


class SharedCursorMachine(RuleBasedStateMachine):
    """Every lookup through the manager advances one shared cursor."""

    def __init__(self):
        super().__init__()
        self.items = list(range(5))
        self.manager = ListManager()
        self.manager.add_list("x", MemoryList(self.items))
        self.expected_index = 0

    @rule()
    def pull_via_lookup(self):
        item = self.manager.get_list_by_name("x").pull()
        if self.expected_index < len(self.items):
            assert item == self.items[self.expected_index]
            self.expected_index += 1
        else:
            assert item is EXHAUSTED

    @invariant()
    def cursor_matches(self):
        assert self.manager.get_list_by_name("x").index == self.expected_index


TestSharedCursor = SharedCursorMachine.TestCase
