"""Tests for bounded loop expansion (for <var> < N ... endfor)."""

import pytest

from pagesmith.template.loops import LoopExpander


class TestLoopExpander:
    """Test loop unrolling."""

    def setup_method(self):
        self.expander = LoopExpander()

    def test_basic_loop_unrolls_with_indices(self):
        """Bound N yields N copies indexed 0..N-1 in order."""
        text = "for i < 3\n<li>${i}</li>\nendfor"

        assert self.expander.expand(text) == "<li>0</li>\n<li>1</li>\n<li>2</li>"

    def test_text_without_directives_is_unchanged(self):
        text = "<p>Hello</p>\n  <b>${name|html}</b>\n\n"

        assert self.expander.expand(text) == text

    def test_surrounding_lines_are_kept(self):
        text = "<ul>\nfor i < 2\n  <li>${i}</li>\nendfor\n</ul>\n"

        assert self.expander.expand(text) == "<ul>\n  <li>0</li>\n  <li>1</li>\n</ul>\n"

    @pytest.mark.parametrize("bound", ["0", "-2", "abc", "3.5"])
    def test_zero_negative_or_malformed_bound_removes_loop(self, bound):
        text = f"a\nfor i < {bound}\n<li>${{i}}</li>\nendfor\nb"

        assert self.expander.expand(text) == "a\nb"

    def test_parse_bound(self):
        assert LoopExpander.parse_bound("4") == 4
        assert LoopExpander.parse_bound("-1") == 0
        assert LoopExpander.parse_bound("") == 0
        assert LoopExpander.parse_bound("ten") == 0

    def test_sequential_loops(self):
        text = "for a < 2\nA${a}\nendfor\nfor b < 1\nB${b}\nendfor"

        assert self.expander.expand(text) == "A0\nA1\nB0"

    def test_nested_loop_can_use_outer_index(self):
        text = "for i < 2\n  for j < 2\n  ${i}${j}\n  endfor\nendfor"

        assert self.expander.expand(text) == "  00\n  01\n  10\n  11"

    def test_nested_loops_at_same_indentation_pair_like_brackets(self):
        text = "for i < 2\nfor j < 2\n${i}${j}\nendfor\nendfor"

        assert self.expander.expand(text) == "00\n01\n10\n11"

    def test_only_bare_loop_variable_is_replaced(self):
        text = "for i < 1\n${i} ${j} ${i|number} ${index}\nendfor"

        assert self.expander.expand(text) == "0 ${j} ${i|number} ${index}"

    def test_unmatched_for_stays_literal_and_is_idempotent(self):
        text = "for i < 2\nno end here"

        once = self.expander.expand(text)
        assert once == text
        assert self.expander.expand(once) == once

    def test_endfor_at_other_indentation_does_not_close(self):
        text = "for i < 2\nx\n  endfor"

        assert self.expander.expand(text) == text

    def test_stray_endfor_is_literal(self):
        text = "a\nendfor\nb"

        assert self.expander.expand(text) == text

    def test_include_lines_in_body_receive_index(self):
        text = "for i < 2\ninclude templates/card-${i}.html\nendfor"

        assert self.expander.expand(text) == (
            "include templates/card-0.html\ninclude templates/card-1.html"
        )

    def test_empty_body(self):
        assert self.expander.expand("x\nfor i < 5\nendfor\ny") == "x\ny"

    def test_expansion_is_idempotent_once_loops_are_gone(self):
        text = "for i < 2\n<p>${i}</p>\nendfor\n"

        once = self.expander.expand(text)
        assert self.expander.expand(once) == once
