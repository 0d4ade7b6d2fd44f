# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""Unit tests for requested-by propagation."""

import pytest

from build_info.core.buildinfo.entities import Dependency
from build_info.core.dependencies.propagator import RequestedByPropagator, _path_members
from build_info.core.dependencies.value_objects import RequestedByLimits


ROOT = "root"


def _nodes(*ids):
    return {node_id: Dependency(id=node_id) for node_id in ids}


def _root():
    return Dependency(id=ROOT, requested_by=[[]])


class TestLinearAndDiamond:
    """Acyclic graphs."""

    def test_direct_child(self):
        """Direct children are requested by the root only."""
        result = RequestedByPropagator().propagate(_root(), _nodes("x:1.0"), {ROOT: ["x:1.0"]})
        assert result["x:1.0"].requested_by == [[ROOT]]

    def test_chain(self):
        """Paths list the nearest parent first and the root last."""
        result = RequestedByPropagator().propagate(
            _root(), _nodes("a", "b", "c"), {ROOT: ["a"], "a": ["b"], "b": ["c"]}
        )
        assert result["c"].requested_by == [["b", "a", ROOT]]

    def test_diamond(self):
        """A shared dependency receives one path per parent."""
        result = RequestedByPropagator().propagate(
            _root(),
            _nodes("b", "c", "d"),
            {ROOT: ["b", "c"], "b": ["d"], "c": ["d"]},
        )
        paths = result["d"].requested_by
        assert sorted(paths) == [["b", ROOT], ["c", ROOT]]

    def test_diamond_below_shared_node(self):
        """Paths multiply through a shared node."""
        result = RequestedByPropagator().propagate(
            _root(),
            _nodes("b", "c", "d", "e"),
            {ROOT: ["b", "c"], "b": ["d"], "c": ["d"], "d": ["e"]},
        )
        assert sorted(result["e"].requested_by) == [["d", "b", ROOT], ["d", "c", ROOT]]

    def test_root_without_paths(self):
        """A root with no requested-by list counts as one empty path."""
        result = RequestedByPropagator().propagate(
            Dependency(id=ROOT), _nodes("x"), {ROOT: ["x"]}
        )
        assert result["x"].requested_by == [[ROOT]]

    def test_unreachable_node(self):
        """Nodes not reachable from the root keep no paths."""
        result = RequestedByPropagator().propagate(
            _root(), _nodes("x", "orphan"), {ROOT: ["x"]}
        )
        assert result["orphan"].requested_by == []

    def test_dangling_reference(self):
        """Children missing from the node map are skipped."""
        result = RequestedByPropagator().propagate(
            _root(), _nodes("x"), {ROOT: ["missing", "x"], "missing": ["x"]}
        )
        assert result["x"].requested_by == [[ROOT]]
        assert "missing" not in result

    def test_inputs_not_mutated(self):
        """The node map passed in is left untouched."""
        nodes = _nodes("x")
        RequestedByPropagator().propagate(_root(), nodes, {ROOT: ["x"]})
        assert nodes["x"].requested_by == []


class TestCycles:
    """Graphs with cycles."""

    @pytest.fixture
    def cycle_result(self):
        """root -> a -> b -> c -> a."""
        return RequestedByPropagator().propagate(
            _root(),
            _nodes("a", "b", "c"),
            {ROOT: ["a"], "a": ["b"], "b": ["c"], "c": ["a"]},
        )

    def test_every_member_flagged(self, cycle_result):
        """Each node on the cycle has a loop."""
        assert all(cycle_result[node_id].has_loop() for node_id in ("a", "b", "c"))

    def test_paths_bounded(self, cycle_result):
        """Propagation stops once the loop is detected."""
        limit = RequestedByLimits().max_path_length
        for node in cycle_result.values():
            assert all(len(path) <= limit for path in node.requested_by)
            assert len(node.requested_by) <= RequestedByLimits().max_paths

    def test_expected_paths(self, cycle_result):
        """The loop path runs once around the cycle."""
        assert cycle_result["a"].requested_by == [[ROOT], ["c", "b", "a", ROOT]]
        assert cycle_result["b"].requested_by == [["a", ROOT], ["a", "c", "b", "a", ROOT]]

    def test_self_loop(self):
        """A package depending on itself is flagged."""
        result = RequestedByPropagator().propagate(
            _root(), _nodes("a"), {ROOT: ["a"], "a": ["a"]}
        )
        assert result["a"].has_loop()

    def test_cycle_not_through_root(self):
        """A cycle below a shared node still terminates."""
        result = RequestedByPropagator().propagate(
            _root(),
            _nodes("a", "b", "x", "y"),
            {ROOT: ["a", "b"], "a": ["x"], "b": ["x"], "x": ["y"], "y": ["x"]},
        )
        assert result["x"].has_loop()
        assert result["y"].has_loop()

    def test_looped_root(self):
        """A root that already has a loop propagates nothing."""
        root = Dependency(id=ROOT, requested_by=[["p", ROOT]])
        result = RequestedByPropagator().propagate(root, _nodes("x"), {ROOT: ["x"]})
        assert result["x"].requested_by == []


class TestLimits:
    """Path count and length caps."""

    def test_no_duplicate_paths(self):
        """Repeated edges do not create duplicate paths."""
        result = RequestedByPropagator().propagate(
            _root(),
            _nodes("a", "b"),
            {ROOT: ["a", "a"], "a": ["b", "b"]},
        )
        for node in result.values():
            as_tuples = [tuple(path) for path in node.requested_by]
            assert len(as_tuples) == len(set(as_tuples))

    def test_max_paths(self):
        """No node keeps more than max_paths paths."""
        parents = [f"p{index}" for index in range(5)]
        adjacency = {ROOT: parents}
        adjacency.update({parent: ["shared"] for parent in parents})
        propagator = RequestedByPropagator(RequestedByLimits(max_paths=2))

        result = propagator.propagate(_root(), _nodes("shared", *parents), adjacency)

        assert result["shared"].requested_by == [["p0", ROOT], ["p1", ROOT]]

    def test_max_path_length(self):
        """Paths longer than the limit are dropped."""
        propagator = RequestedByPropagator(RequestedByLimits(max_path_length=2))
        result = propagator.propagate(
            _root(), _nodes("a", "b", "c"), {ROOT: ["a"], "a": ["b"], "b": ["c"]}
        )
        assert result["b"].requested_by == [["a", ROOT]]
        assert result["c"].requested_by == []

    def test_wide_graph_bounded(self):
        """A dense layered graph stays within both caps."""
        layers = [[f"n{layer}_{index}" for index in range(4)] for layer in range(6)]
        adjacency = {ROOT: layers[0]}
        for upper, lower in zip(layers, layers[1:]):
            for node_id in upper:
                adjacency[node_id] = list(lower)
        limits = RequestedByLimits(max_paths=15, max_path_length=50)
        all_ids = [node_id for layer in layers for node_id in layer]

        result = RequestedByPropagator(limits).propagate(_root(), _nodes(*all_ids), adjacency)

        for node in result.values():
            assert 1 <= len(node.requested_by) <= limits.max_paths

    def test_default_limits(self):
        """Defaults are 15 paths of at most 50 ids."""
        limits = RequestedByPropagator().limits
        assert limits.max_paths == 15
        assert limits.max_path_length == 50


class TestPathMembers:
    """Tests for the per-path id sets used in loop detection."""

    def test_derived_path_reuses_tail(self):
        """Extending a known path adds one entry without rebuilding the tail."""
        members = {(): frozenset()}
        tail = _path_members(("a", ROOT), members)
        derived = _path_members(("b", "a", ROOT), members)

        assert tail == {"a", ROOT}
        assert derived == {"b", "a", ROOT}
        assert members[("a", ROOT)] is tail
        assert set(members) == {(), (ROOT,), ("a", ROOT), ("b", "a", ROOT)}

    def test_long_cycle_flagged(self):
        """Every member of a long cycle is flagged."""
        ids = [f"n{index}" for index in range(300)]
        adjacency = {ROOT: [ids[0]]}
        for current, following in zip(ids, ids[1:] + ids[:1]):
            adjacency[current] = [following]
        limits = RequestedByLimits(max_paths=15, max_path_length=1000)

        result = RequestedByPropagator(limits).propagate(_root(), _nodes(*ids), adjacency)

        assert all(result[node_id].has_loop() for node_id in ids)
        assert result["n1"].requested_by[0] == ["n0", ROOT]
