"""
Tests for dependency graph analysis
"""

import random
import pytest
from conftest import make_task
from taskflow.services.dependency_graph import (
    blocked_by,
    dependent_count,
    depth,
    group_by_depth,
    has_cycle,
    is_ready,
    pending_dependencies,
    topological_order,
)
from taskflow.utils.error_handler import DependencyCycleError


def random_acyclic_tasks(seed, size=12):
    """Random DAG: each task may only depend on lower ids, shuffled order"""
    rng = random.Random(seed)
    tasks = []
    for task_id in range(1, size + 1):
        candidates = list(range(1, task_id))
        deps = rng.sample(candidates, k=rng.randint(0, min(3, len(candidates))))
        status = rng.choice(["pendente", "em-progresso", "concluida"])
        tasks.append(make_task(task_id, dependencies=deps, status=status))
    rng.shuffle(tasks)
    return tasks


def test_is_ready_without_dependencies():
    """Test task with no dependencies is always ready"""
    task = make_task(1)
    assert is_ready(task, [task])


def test_is_ready_requires_all_done():
    """Test readiness needs every dependency done"""
    done = make_task(1, status="concluida")
    in_progress = make_task(2, status="em-progresso")
    task = make_task(3, dependencies=[1, 2])
    tasks = [done, in_progress, task]

    assert not is_ready(task, tasks)

    in_progress.status = "concluida"
    assert is_ready(task, tasks)


def test_is_ready_dangling_dependency():
    """Test a dependency on a missing task is never satisfied"""
    task = make_task(1, dependencies=[99])
    assert not is_ready(task, [task])
    assert pending_dependencies(task, [task]) == [99]


def test_pending_dependencies_lists_unmet_ids():
    """Test only dependencies not done are reported"""
    tasks = [
        make_task(1, status="concluida"),
        make_task(2),
        make_task(3, dependencies=[1, 2]),
    ]
    assert pending_dependencies(tasks[2], tasks) == [2]


def test_blocked_by_and_dependent_count():
    """Test dependents lookup"""
    tasks = [
        make_task(1),
        make_task(2, dependencies=[1]),
        make_task(3, dependencies=[1, 2]),
    ]
    assert [t.id for t in blocked_by(1, tasks)] == [2, 3]
    assert [t.id for t in blocked_by(3, tasks)] == []
    assert dependent_count(1, tasks) == 2
    assert dependent_count(2, tasks) == 1


def test_has_cycle_detects_transitive_loop():
    """Test closing a loop through a chain is detected"""
    tasks = [
        make_task(1),
        make_task(2, dependencies=[1]),
        make_task(3, dependencies=[2]),
    ]
    # 1 depending on 3 would close 1 -> 3 -> 2 -> 1
    assert has_cycle(1, 3, tasks)
    assert has_cycle(2, 3, tasks)
    # 3 depending on 1 only adds a shortcut
    assert not has_cycle(3, 1, tasks)


def test_has_cycle_handles_diamond_and_missing_ids():
    """Test shared ancestors and dangling ids do not confuse the walk"""
    tasks = [
        make_task(1),
        make_task(2, dependencies=[1]),
        make_task(3, dependencies=[1]),
        make_task(4, dependencies=[2, 3, 42]),
    ]
    assert not has_cycle(5, 4, tasks)
    assert has_cycle(1, 4, tasks)


@pytest.mark.parametrize("seed", range(10))
def test_has_cycle_matches_reachability(seed):
    """Test has_cycle is true exactly when the candidate reaches the task"""
    tasks = random_acyclic_tasks(seed)
    by_id = {t.id: t for t in tasks}

    def reaches(start, target):
        stack, seen = [start], set()
        while stack:
            current = stack.pop()
            if current == target:
                return True
            if current not in seen:
                seen.add(current)
                stack.extend(by_id[current].dependencies)
        return False

    for a in by_id:
        for b in by_id:
            if a != b:
                assert has_cycle(a, b, tasks) == reaches(b, a)


def test_topological_order_places_dependencies_first():
    """Test simple chain ordering"""
    tasks = [
        make_task(1, dependencies=[2]),
        make_task(2),
        make_task(3, dependencies=[1]),
    ]
    order = topological_order(tasks)

    assert order.is_complete
    assert [t.id for t in order.tasks] == [2, 1, 3]


@pytest.mark.parametrize("seed", range(10))
def test_topological_order_is_sound_on_acyclic_graphs(seed):
    """Test every task follows all of its dependencies"""
    tasks = random_acyclic_tasks(seed)
    order = topological_order(tasks)

    assert order.is_complete
    positions = {t.id: i for i, t in enumerate(order.tasks)}
    assert len(positions) == len(tasks)
    for task in tasks:
        for dep_id in task.dependencies:
            assert positions[dep_id] < positions[task.id]


def test_topological_order_ignores_outside_dependencies():
    """Test dependencies outside the ordered set do not block placement"""
    pending = [make_task(2, dependencies=[1]), make_task(3, dependencies=[2])]
    order = topological_order(pending)

    assert order.is_complete
    assert [t.id for t in order.tasks] == [2, 3]


def test_topological_order_returns_residual_on_cycle():
    """Test a cycle degrades to a residual tail instead of raising"""
    tasks = [
        make_task(1),
        make_task(2, dependencies=[3]),
        make_task(3, dependencies=[2]),
        make_task(4, dependencies=[1]),
    ]
    order = topological_order(tasks)

    assert not order.is_complete
    assert [t.id for t in order.ordered] == [1, 4]
    assert [t.id for t in order.residual] == [2, 3]
    assert [t.id for t in order.tasks] == [1, 4, 2, 3]


def test_depth_values():
    """Test depth is the longest chain length"""
    tasks = [
        make_task(1),
        make_task(2, dependencies=[1]),
        make_task(3, dependencies=[1]),
        make_task(4, dependencies=[2, 3]),
        make_task(5, dependencies=[4, 1]),
    ]
    assert [depth(t.id, tasks) for t in tasks] == [0, 1, 1, 2, 3]
    assert depth(99, tasks) == 0


def test_depth_memo_is_filled():
    """Test memo caches every visited node"""
    tasks = [make_task(1), make_task(2, dependencies=[1]), make_task(3, dependencies=[2])]
    memo = {}
    assert depth(3, tasks, memo) == 2
    assert memo == {1: 0, 2: 1, 3: 2}


@pytest.mark.parametrize("seed", range(10))
def test_depth_monotonicity(seed):
    """Test depth(T) >= 1 + depth(D) for every dependency D"""
    tasks = random_acyclic_tasks(seed)
    memo = {}
    for task in tasks:
        task_depth = depth(task.id, tasks, memo)
        if not task.dependencies:
            assert task_depth == 0
        for dep_id in task.dependencies:
            assert task_depth >= 1 + depth(dep_id, tasks, memo)


def test_depth_raises_on_cycle():
    """Test a stored cycle fails fast instead of recursing forever"""
    tasks = [
        make_task(1, dependencies=[2]),
        make_task(2, dependencies=[1]),
        make_task(3),
    ]
    with pytest.raises(DependencyCycleError) as exc_info:
        depth(1, tasks)

    assert exc_info.value.cycle == [1, 2, 1]
    assert depth(3, tasks) == 0


def test_group_by_depth():
    """Test grouping keeps insertion order inside each level"""
    tasks = [
        make_task(3, dependencies=[1]),
        make_task(1),
        make_task(2),
        make_task(4, dependencies=[3]),
    ]
    groups = group_by_depth(tasks)

    assert list(groups.keys()) == [0, 1, 2]
    assert [t.id for t in groups[0]] == [1, 2]
    assert [t.id for t in groups[1]] == [3]
    assert [t.id for t in groups[2]] == [4]
