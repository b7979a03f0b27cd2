"""
Update-sequence controller.

Owns the ordered program sequence of a multi-step update (index 0 is the
oldest program) and drives the workflow: append programs, detect
conflicts, generate solutions, accept a chosen solution, re-detect and
finally merge the sequence into a single program.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from aspupdate.config import UpdateConfig, config
from aspupdate.contradiction import (
    CausalRejectionDetector,
    Conflict,
    OperationType,
    Solution,
)
from aspupdate.logging import get_component_logger, log_update_operation, track_operation
from aspupdate.measures import SolutionScore, answer_set_distance, rule_distance
from aspupdate.persistence import ProgramStore
from aspupdate.resolution import ResolutionStrategy, default_strategies
from aspupdate.solver import AnswerSetSolver, SolverError
from aspupdate.symbolic import (
    AnswerSet,
    ParseError,
    Program,
    ProgramError,
    UnknownRuleError,
    merge_programs,
    parse_answer_sets,
    parse_program,
)

from .results import AppliedOperation, DetectionResult, DetectionStatus

log = get_component_logger("update")


def apply_solution(sequence: Sequence[Program], solution: Solution) -> List[Program]:
    """
    Apply the chosen operations of ``solution`` to a copy of ``sequence``.

    Added rules go to the newest program; modified and deleted rules are
    changed in every program holding their identifier.

    Raises:
        ProgramError: If an operation is invalid (unknown identifier,
            duplicate or empty rule); ``sequence`` is left untouched
    """
    if not sequence:
        raise ProgramError("Cannot apply a solution to an empty sequence")
    programs = list(sequence)

    for rule in solution.additions:
        programs[-1] = programs[-1].with_rule(rule)

    for rule in solution.modifications:
        for index in _holders(programs, rule.rule_id):
            programs[index] = programs[index].with_modified_rule(rule)

    for rule in solution.deletions:
        for index in _holders(programs, rule.rule_id):
            programs[index] = programs[index].without_rule(rule.rule_id)

    return programs


def _holders(programs: Sequence[Program], rule_id: int) -> List[int]:
    indices = [i for i, program in enumerate(programs) if program.contains_rule_id(rule_id)]
    if not indices:
        raise UnknownRuleError(rule_id)
    return indices


class UpdateSequenceController:
    """
    Orchestrates detection and resolution of conflicts in an update sequence.

    Detection compares two programs at a time. With more than two programs
    the first is compared against the second; a conflict-free pair is
    merged and compared against the next program, and so on.

    Example:
        >>> controller = UpdateSequenceController(ClingoSolver())
        >>> controller.add_program(parse_program(old_text, "old"))
        True
        >>> controller.add_program(parse_program(new_text, "new"))
        True
        >>> result = controller.detect_conflicts()
        >>> while result.has_conflicts:
        ...     result = controller.accept_solution(result.conflicts[0].solutions[0])
        >>> merged = controller.merge_sequence()
    """

    def __init__(
        self,
        solver: AnswerSetSolver,
        detector: Optional[CausalRejectionDetector] = None,
        strategies: Optional[Iterable[ResolutionStrategy]] = None,
        store: Optional[ProgramStore] = None,
        update_config: Optional[UpdateConfig] = None,
    ):
        self.solver = solver
        self.detector = detector or CausalRejectionDetector()
        self.strategies: List[ResolutionStrategy] = (
            list(strategies) if strategies is not None else default_strategies()
        )
        self.store = store
        self.config = update_config or config.update

        self._sequence: List[Program] = []
        self._pristine: List[Program] = []
        self._conflicts: List[Conflict] = []
        self._answer_sets: List[AnswerSet] = []
        self._operation_log: List[AppliedOperation] = []

    # State accessors

    @property
    def sequence(self) -> Tuple[Program, ...]:
        return tuple(self._sequence)

    @property
    def pristine_sequence(self) -> Tuple[Program, ...]:
        """The programs as they were appended, before any solution was accepted."""
        return tuple(self._pristine)

    @property
    def current_conflicts(self) -> List[Conflict]:
        return list(self._conflicts)

    @property
    def current_answer_sets(self) -> List[AnswerSet]:
        return list(self._answer_sets)

    @property
    def operation_log(self) -> Tuple[AppliedOperation, ...]:
        return tuple(self._operation_log)

    def applied_operations(self) -> Dict[OperationType, List]:
        """
        Accepted operations folded by kind.

        A later modification of an added rule replaces the added version; a
        later modification of a modified rule replaces the earlier one.
        """
        folded: Dict[OperationType, List] = {kind: [] for kind in OperationType}
        for entry in self._operation_log:
            rule_id = entry.rule.rule_id
            if entry.operation is OperationType.MODIFY:
                added = folded[OperationType.ADD]
                position = next(
                    (i for i, rule in enumerate(added) if rule.rule_id == rule_id), None
                )
                if position is not None:
                    added[position] = entry.rule
                    continue
                folded[OperationType.MODIFY] = [
                    rule for rule in folded[OperationType.MODIFY] if rule.rule_id != rule_id
                ]
            folded[entry.operation].append(entry.rule)
        return folded

    # Building the sequence

    def add_program(self, program: Optional[Program], relabel: Optional[bool] = None) -> bool:
        """
        Append ``program`` as the newest program of the sequence.

        Rules are re-labelled to avoid label collisions unless disabled.
        Returns False for a missing or empty program.
        """
        if program is None or program.is_empty:
            log.warning("Rejected empty program")
            return False

        if relabel is None:
            relabel = self.config.relabel_incoming
        if relabel:
            existing = [rule for current in self._sequence for rule in current]
            program = program.relabelled(len(existing), reserved=existing)

        self._sequence.append(program)
        self._pristine.append(program)
        log_update_operation(log, "program_add", program=program.name, rules=len(program))
        log.info(f"Added program '{program.name}' ({len(program)} rules) to the sequence")
        return True

    def set_initial_program(self, program: Program) -> bool:
        """Clear the sequence and start it with ``program``."""
        self.clear()
        return self.add_program(program)

    def add_program_by_name(self, name: str) -> bool:
        """Load a stored program, parse it and append it."""
        if self.store is None:
            log.error("No program store configured")
            return False
        text = self.store.load(name)
        if not text:
            log.warning(f"No stored program named '{name}'")
            return False
        try:
            program = parse_program(text, name)
        except ParseError as e:
            log.warning(f"Stored program '{name}' could not be parsed: {e}")
            return False
        return self.add_program(program)

    def load_available_programs(self) -> Dict[str, Program]:
        """Parse every stored program; unparseable ones are skipped."""
        if self.store is None:
            return {}
        programs: Dict[str, Program] = {}
        for name, text in self.store.list_available().items():
            try:
                programs[name] = parse_program(text, name)
            except ParseError as e:
                log.warning(f"Skipping stored program '{name}': {e}")
        return programs

    def clear(self) -> None:
        """Forget the sequence, conflicts and accepted operations."""
        self._sequence.clear()
        self._pristine.clear()
        self._conflicts.clear()
        self._answer_sets.clear()
        self._operation_log.clear()
        log.debug("Cleared update sequence")

    # Detection

    @track_operation("detect_conflicts")
    def detect_conflicts(self) -> DetectionResult:
        """
        Detect conflicts in the current sequence and generate solutions.

        Every non-interactive strategy is applied to each conflict and the
        resulting solutions are scored. A successful result with no
        conflicts means the sequence is conflict-free; a failed result
        means detection was not possible.
        """
        result = self._detect(self._sequence)
        if not result.ok:
            self._conflicts = []
            self._answer_sets = []
            return result

        self._conflicts = list(result.conflicts)
        self._answer_sets = list(result.answer_sets)

        for conflict in self._conflicts:
            for strategy in self.strategies:
                if not strategy.interactive:
                    strategy.apply(self._sequence, conflict)
            if self.config.score_solutions:
                for solution in conflict.solutions:
                    self.score_solution(solution)

        log.info(f"Detected {len(self._conflicts)} conflict(s)")
        return result

    def _detect(self, sequence: Sequence[Program]) -> DetectionResult:
        if len(sequence) < 2:
            return DetectionResult.failure(
                DetectionStatus.TOO_FEW_PROGRAMS,
                f"Detection needs at least two programs, the sequence has {len(sequence)}",
            )

        # Pairs are checked oldest first; a pair is folded into the base only
        # once it is conflict-free and consistent.
        older = sequence[0]
        for position in range(1, len(sequence)):
            result = self._detect_pair(older, sequence[position])
            last = position == len(sequence) - 1
            if last or not result.ok or result.has_conflicts or not result.consistent:
                if not last:
                    log.info(
                        f"Stopped at program {position} of {len(sequence) - 1}: "
                        f"{len(result.conflicts)} conflict(s), consistent={result.consistent}"
                    )
                return result
            older = merge_programs([older, sequence[position]], older.name)

    def _detect_pair(self, older: Program, newer: Program) -> DetectionResult:
        pair = [older, newer]
        mup = self.detector.build_update_program(pair)

        try:
            solve_result = self.solver.compute_models(mup)
        except SolverError as e:
            log.error(f"Conflict detection failed: {e}")
            return DetectionResult.failure(DetectionStatus.SOLVER_ERROR, str(e))

        if not solve_result.satisfiable:
            log.warning("The update program has no answer set")
            return DetectionResult(status=DetectionStatus.OK, consistent=False)

        answer_sets = parse_answer_sets(solve_result.models)
        if len(answer_sets) != len(solve_result.models):
            return DetectionResult.failure(
                DetectionStatus.UNPARSABLE_MODELS, "Solver returned unparsable answer sets"
            )

        conflicts = self.detector.extract_conflicts(pair, answer_sets)
        base = set(self.detector.literal_base(pair))
        visible: List[AnswerSet] = []
        for answer_set in answer_sets:
            restricted = answer_set.restricted_to(base)
            if restricted not in visible:
                visible.append(restricted)
        return DetectionResult(status=DetectionStatus.OK, conflicts=conflicts, answer_sets=visible)

    # Solutions

    @track_operation("accept_solution")
    def accept_solution(self, solution: Optional[Solution]) -> DetectionResult:
        """
        Apply ``solution`` to the sequence, log its operations and re-detect.

        An invalid solution leaves the sequence and the operation log
        unchanged and yields an ``INVALID_SOLUTION`` result.
        """
        if solution is None or solution.is_empty():
            return DetectionResult.failure(
                DetectionStatus.INVALID_SOLUTION, "Solution has no operations"
            )
        try:
            updated = apply_solution(self._sequence, solution)
        except ProgramError as e:
            log.warning(f"Rejected solution: {e}")
            return DetectionResult.failure(DetectionStatus.INVALID_SOLUTION, str(e))

        self._sequence = updated
        for kind, rules in solution.operations.items():
            for rule in rules:
                self._operation_log.append(AppliedOperation(rule, kind))
        log.info(f"Accepted solution: {solution}")
        return self.detect_conflicts()

    def preview_solution(self, solution: Solution) -> DetectionResult:
        """Conflicts and answer sets the sequence would have after ``solution``."""
        try:
            previewed = apply_solution(self._sequence, solution)
        except ProgramError as e:
            return DetectionResult.failure(DetectionStatus.INVALID_SOLUTION, str(e))
        return self._detect(previewed)

    def score_solution(self, solution: Solution) -> SolutionScore:
        """Compute and attach the measures of ``solution``."""
        preview = self.preview_solution(solution)
        score = SolutionScore(
            answer_set_distance=(
                answer_set_distance(self._answer_sets, preview.answer_sets)
                if preview.ok
                else None
            ),
            rule_distance=rule_distance(solution, self._sequence),
        )
        solution.measures = score.to_dict()
        return score

    # Merging

    @track_operation("merge_sequence")
    def merge_sequence(self, name: Optional[str] = None) -> Optional[Program]:
        """
        Fold the sequence into its first program.

        Unresolved conflicts are reported but do not prevent merging.
        Returns None for an empty sequence.
        """
        if not self._sequence:
            log.warning("Nothing to merge")
            return None
        if self._conflicts:
            log.warning(f"Merging with {len(self._conflicts)} unresolved conflict(s)")
        return merge_programs(self._sequence, name)

    def persist_merged(self, name: str) -> bool:
        """Merge the sequence and store the result under ``name``."""
        if self.store is None:
            log.error("No program store configured")
            return False
        merged = self.merge_sequence(name)
        if merged is None:
            return False
        return self.store.persist(merged, name)
