"""
Integration tests running the full update workflow against clingo.
"""

import pytest

pytest.importorskip("clingo")

from aspupdate.config import SolverConfig, UpdateConfig  # noqa: E402
from aspupdate.core import DetectionStatus, UpdateSequenceController  # noqa: E402
from aspupdate.solver import ClingoSolver  # noqa: E402
from aspupdate.symbolic import parse_program  # noqa: E402

pytestmark = pytest.mark.integration

OLD = """
bird(tweety).
flies(tweety) :- bird(tweety).
"""

NEW = """
-flies(tweety) :- bird(tweety), penguin(tweety).
penguin(tweety).
"""


@pytest.fixture
def controller() -> UpdateSequenceController:
    """Controller with a real solver."""
    return UpdateSequenceController(
        ClingoSolver(SolverConfig(timeout_seconds=20.0)),
        update_config=UpdateConfig(score_solutions=True),
    )


def _load(controller, old: str, new: str) -> None:
    assert controller.add_program(parse_program(old, "old"))
    assert controller.add_program(parse_program(new, "new"))


class TestTweety:
    """The classic penguin update."""

    def test_single_conflict_detected(self, controller) -> None:
        """Exactly the two head-clashing rules conflict."""
        _load(controller, OLD, NEW)

        result = controller.detect_conflicts()

        assert result.ok and result.consistent
        assert len(result.conflicts) == 1
        conflict = result.conflicts[0]
        assert conflict.older.to_asp() == "flies(tweety) :- bird(tweety)."
        assert conflict.newer.to_asp() == "-flies(tweety) :- bird(tweety), penguin(tweety)."
        assert conflict.answer_sets[0].to_list() == [
            "-flies(tweety)",
            "bird(tweety)",
            "penguin(tweety)",
        ]

    def test_direct_solution(self, controller) -> None:
        """The direct strategy proposes default-negating penguin(tweety)."""
        _load(controller, OLD, NEW)
        conflict = controller.detect_conflicts().conflicts[0]

        direct = [s for s in conflict.solutions if s.strategy == "direct"]
        assert len(direct) == 1
        assert [r.to_asp() for r in direct[0].modifications] == [
            "flies(tweety) :- bird(tweety), not penguin(tweety)."
        ]
        assert direct[0].measures["rule_distance"] == 1
        assert direct[0].measures["answer_set_distance"] == 0

    def test_every_solution_removes_the_conflict(self, controller) -> None:
        """No generated solution leaves the same rule pair conflicting."""
        _load(controller, OLD, NEW)
        conflict = controller.detect_conflicts().conflicts[0]
        assert conflict.solutions

        for solution in conflict.solutions:
            preview = controller.preview_solution(solution)
            assert preview.ok
            assert conflict.rule_pair not in [c.rule_pair for c in preview.conflicts]

    def test_resolve_and_merge(self, controller) -> None:
        """Accepting the direct solution yields a conflict-free merge."""
        _load(controller, OLD, NEW)
        conflict = controller.detect_conflicts().conflicts[0]

        result = controller.accept_solution(conflict.solutions[0])

        assert result.ok
        assert result.conflicts == []
        merged = controller.merge_sequence("kb")
        assert merged.to_asp().splitlines() == [
            "bird(tweety).",
            "flies(tweety) :- bird(tweety), not penguin(tweety).",
            "-flies(tweety) :- bird(tweety), penguin(tweety).",
            "penguin(tweety).",
        ]


class TestOtherSequences:
    """Further sequences exercising detection."""

    def test_no_conflict(self, controller) -> None:
        """Compatible programs produce no conflicts."""
        _load(controller, "a. b :- a.", "c :- b.")

        result = controller.detect_conflicts()

        assert result.ok
        assert result.conflicts == []
        assert result.answer_sets[0].to_list() == ["a", "b", "c"]

    def test_too_few_programs(self, controller) -> None:
        """A single program cannot be checked."""
        controller.add_program(parse_program(OLD, "old"))
        assert controller.detect_conflicts().status is DetectionStatus.TOO_FEW_PROGRAMS

    def test_inactive_newer_rule_is_no_conflict(self, controller) -> None:
        """A clash only counts when the newer rule can fire."""
        _load(controller, "p. q :- p.", "-q :- r.")
        assert controller.detect_conflicts().conflicts == []

    def test_detector_symmetry(self) -> None:
        """Swapping older and newer finds the same head clash."""
        first = parse_program("p. q :- p.", "first")
        second = parse_program("-q :- p.", "second")
        found = []
        for pair in ((first, second), (second, first)):
            controller = UpdateSequenceController(
                ClingoSolver(), update_config=UpdateConfig(score_solutions=False)
            )
            for program in pair:
                controller.add_program(program)
            conflicts = controller.detect_conflicts().conflicts
            assert len(conflicts) == 1
            found.append({conflicts[0].older.rule_id, conflicts[0].newer.rule_id})

        assert found[0] == found[1]

    def test_rejection_rule_solution_resolves(self, controller) -> None:
        """An added rejection rule disables the older rule."""
        _load(controller, "c. a :- not b.", "-a :- c.")
        conflict = controller.detect_conflicts().conflicts[0]

        rejection = [s for s in conflict.solutions if s.strategy == "rejection_rule"]
        assert [s.additions[0].to_asp() for s in rejection] == ["b :- c."]

        result = controller.accept_solution(rejection[0])
        assert result.ok
        assert result.conflicts == []

    def test_three_programs_report_early_conflict(self, controller) -> None:
        """A conflict between the first two programs survives a third one."""
        controller.add_program(parse_program("p(x) :- a(x). a(x).", "first"))
        controller.add_program(parse_program("-p(x) :- a(x).", "second"))
        controller.add_program(parse_program("b(x).", "third"))

        result = controller.detect_conflicts()

        assert result.ok and result.consistent
        assert len(result.conflicts) == 1
        assert result.conflicts[0].older.to_asp() == "p(x) :- a(x)."
