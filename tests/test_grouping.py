"""Tests for grouping tickets into frames."""

from jira_epic_dashboard.diagram.grouping import group_tickets


def _keys(groups):
    return [[t.key for t in group] for group in groups]


class TestGroupTickets:
    """Tests for group_tickets."""

    def test_empty_input(self):
        assert group_tickets([]) == ([], [])

    def test_chain_forms_one_group(self, make_graph):
        tickets = make_graph(["X", "Y", "Z"], [("X", "Y"), ("Y", "Z")])
        groups, unframed = group_tickets(tickets)
        assert _keys(groups) == [["X", "Y", "Z"]]
        assert unframed == []

    def test_unlinked_tickets_are_unframed(self, make_ticket):
        tickets = [make_ticket("A"), make_ticket("B")]
        groups, unframed = group_tickets(tickets)
        assert groups == []
        assert [t.key for t in unframed] == ["A", "B"]

    def test_disjoint_chains_form_separate_groups(self, make_graph):
        tickets = make_graph(["A", "B", "C", "D"], [("A", "B"), ("C", "D")])
        groups, _ = group_tickets(tickets)
        assert _keys(groups) == [["A", "B"], ["C", "D"]]

    def test_one_sided_link_still_connects(self, make_ticket):
        # Only A records the link; B has no blocked_by entry
        tickets = [make_ticket("A", blocks=["B"]), make_ticket("B")]
        groups, unframed = group_tickets(tickets)
        assert _keys(groups) == [["A", "B"]]
        assert unframed == []

    def test_only_dangling_links_means_unframed(self, make_ticket):
        tickets = [make_ticket("A", blocks=["GHOST-1"])]
        groups, unframed = group_tickets(tickets)
        assert groups == []
        assert [t.key for t in unframed] == ["A"]

    def test_dangling_links_are_ignored_inside_groups(self, make_ticket):
        tickets = [
            make_ticket("A", blocks=["B", "GHOST-1"]),
            make_ticket("B", blocked_by=["A", "GHOST-2"]),
        ]
        groups, _ = group_tickets(tickets)
        assert _keys(groups) == [["A", "B"]]

    def test_self_reference_terminates_and_is_unframed(self, make_ticket):
        tickets = [make_ticket("A", blocks=["A"], blocked_by=["A"])]
        groups, unframed = group_tickets(tickets)
        assert groups == []
        assert [t.key for t in unframed] == ["A"]

    def test_cycle_forms_one_group(self, make_graph):
        tickets = make_graph(["A", "B", "C"], [("A", "B"), ("B", "C"), ("C", "A")])
        groups, _ = group_tickets(tickets)
        assert [sorted(g) for g in _keys(groups)] == [["A", "B", "C"]]

    def test_grouping_follows_paths_only(self, make_graph):
        tickets = make_graph(
            ["A", "B", "C", "D", "E", "F"],
            [("A", "B"), ("C", "B"), ("D", "E")],
        )
        groups, unframed = group_tickets(tickets)
        assert [set(g) for g in _keys(groups)] == [{"A", "B", "C"}, {"D", "E"}]
        assert [t.key for t in unframed] == ["F"]

    def test_partition_independent_of_input_order(self, make_graph):
        tickets = make_graph(
            ["A", "B", "C", "D", "E"],
            [("A", "B"), ("B", "C"), ("D", "E")],
        )
        forward, _ = group_tickets(tickets)
        backward, _ = group_tickets(list(reversed(tickets)))
        assert {frozenset(g) for g in _keys(forward)} == {frozenset(g) for g in _keys(backward)}

    def test_every_ticket_is_grouped_or_unframed_exactly_once(self, make_graph):
        keys = [f"T-{i}" for i in range(10)]
        tickets = make_graph(keys, [("T-0", "T-1"), ("T-1", "T-2"), ("T-5", "T-6"), ("T-9", "T-5")])
        groups, unframed = group_tickets(tickets)
        seen = [t.key for g in groups for t in g] + [t.key for t in unframed]
        assert sorted(seen) == sorted(keys)

    def test_duplicate_keys_keep_first_ticket(self, make_ticket):
        first = make_ticket("A", blocks=["B"])
        tickets = [first, make_ticket("A"), make_ticket("B", blocked_by=["A"])]
        groups, unframed = group_tickets(tickets)
        assert groups[0][0] is first
        assert unframed == []

    def test_does_not_mutate_input(self, make_graph):
        tickets = make_graph(["A", "B"], [("A", "B")])
        before = [(t.key, list(t.blocks), list(t.blocked_by)) for t in tickets]
        group_tickets(tickets)
        assert [(t.key, t.blocks, t.blocked_by) for t in tickets] == before
