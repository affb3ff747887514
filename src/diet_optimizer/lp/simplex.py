from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Sequence

from ..schemas import DietSolution, Item, RequirementSet, SolveOptions, TableauSnapshot
from .extraction import SolutionExtractor
from .pivoting import PivotSelector
from .tableau import Tableau
from .utils import as_requirement_set, build_tableau, meets_requirements, validate_inputs

logger = logging.getLogger(__name__)


class EngineState(str, Enum):
    RUNNING = "running"
    OPTIMAL = "optimal"
    UNBOUNDED = "unbounded"
    INFEASIBLE = "infeasible"
    ITERATION_LIMIT = "iteration_limit"


class SimplexEngine:
    """
    Drives a Tableau to a terminal state.

    While some constraint row has a negative right-hand side the engine takes
    dual simplex steps (leaving row first); once the RHS is non-negative it
    takes primal steps until no reduced cost is negative. Each pivot is
    recorded as an immutable snapshot. The engine owns its tableau; build a
    new engine per solve.
    """

    def __init__(self, tableau: Tableau, options: Optional[SolveOptions] = None) -> None:
        self.options = options or SolveOptions()
        self.tableau = tableau
        self.selector = PivotSelector(tableau, self.options.tol)
        self.state = EngineState.RUNNING
        self.iterations = 0
        self.snapshots: List[TableauSnapshot] = []
        if self.options.record_snapshots:
            self.snapshots.append(tableau.snapshot(0))

    @property
    def terminal(self) -> bool:
        return self.state is not EngineState.RUNNING

    def step(self) -> EngineState:
        if self.terminal:
            return self.state

        row = self.selector.find_infeasible_row()
        if row is not None:
            col = self.selector.find_dual_entering_column(row)
            if col is None:
                logger.info("Constraint row %d cannot be satisfied by any column", row)
                self.state = EngineState.INFEASIBLE
                return self.state
        else:
            col = self.selector.find_entering_column()
            if col is None:
                self.state = EngineState.OPTIMAL
                return self.state
            row = self.selector.find_leaving_row(col)
            if row is None:
                logger.info("Column %d has no leaving row; problem is unbounded", col)
                self.state = EngineState.UNBOUNDED
                return self.state

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Iteration %d: pivot at row %d, column %d (element %.6g)",
                self.iterations + 1,
                row,
                col,
                self.tableau.matrix[row, col],
            )
        self.tableau.pivot(row, col)
        self.iterations += 1
        if self.options.record_snapshots:
            self.snapshots.append(self.tableau.snapshot(self.iterations, row, col))

        if self.iterations >= self.options.max_iters:
            self.state = EngineState.ITERATION_LIMIT
        return self.state

    def run(self) -> EngineState:
        while not self.terminal:
            self.step()
        logger.info("Simplex finished: %s after %d pivots", self.state.value, self.iterations)
        return self.state


def solve(
    items: Sequence[Item],
    requirements: RequirementSet | Sequence[float],
    options: Optional[SolveOptions] = None,
) -> DietSolution:
    """
    Minimum-cost combination of ``items`` meeting every nutrient minimum.

    The outcome is carried by ``status`` (``optimal``, ``infeasible``,
    ``unbounded``, ``iteration_limit`` or ``invalid_input``); amounts are
    only present for ``optimal`` and ``iteration_limit``.
    """

    opts = options or SolveOptions()
    item_names = [item.name for item in items]
    try:
        reqs = as_requirement_set(requirements)
        validate_inputs(items, reqs)
    except ValueError as exc:
        return DietSolution(
            status="invalid_input",
            feasible=False,
            amounts=None,
            total_cost=None,
            shadow_prices=None,
            item_names=item_names,
            iterations=0,
            message=str(exc),
        )

    engine = SimplexEngine(build_tableau(items, reqs), opts)
    state = engine.run()

    if state in (EngineState.UNBOUNDED, EngineState.INFEASIBLE):
        message = "Unbounded." if state is EngineState.UNBOUNDED else "Infeasible."
        return DietSolution(
            status=state.value,
            feasible=False,
            amounts=None,
            total_cost=None,
            shadow_prices=None,
            item_names=item_names,
            iterations=engine.iterations,
            snapshots=engine.snapshots,
            message=message,
        )

    extractor = SolutionExtractor(opts.tol)
    amounts, total_cost, shadow_prices = extractor.extract(engine.tableau, items)
    feasible = meets_requirements(amounts, items, reqs.minimums, opts.tol)

    message = ""
    if state is EngineState.ITERATION_LIMIT:
        message = f"Hit iteration limit ({opts.max_iters}); result may not be optimal."
    elif not feasible:
        message = "Extracted amounts do not meet every requirement."

    return DietSolution(
        status=state.value,
        feasible=feasible,
        amounts=amounts,
        total_cost=total_cost,
        shadow_prices=shadow_prices,
        item_names=item_names,
        iterations=engine.iterations,
        snapshots=engine.snapshots,
        message=message,
    )
