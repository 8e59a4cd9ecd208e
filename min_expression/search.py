"""
Best-first (uniform-cost) search for the cheapest expression of a goal value.

The search explores the space of reachable values by:
1. Seeding the frontier with one leaf per seed value (cost 1 each).
2. Repeatedly settling the cheapest open node: its term count is final.
3. Combining the settled node with every settled node (itself included),
   and filtering each candidate through `discover`.
4. Stopping once no candidate that could still be generated can beat the
   best known expression for the goal.

Why the stopping rule is sound: every future candidate is built from the
node just settled (or a later, no cheaper one) and some settled node of
cost >= 1, so it costs at least `N.term_count + 1`. When that lower bound
reaches the goal's best known term count, nothing cheaper can appear.
The argument relies on leaves costing exactly 1, which seeding guarantees.

Discover filters, in order:
- values already settled are dropped (their minimum is proven);
- values outside the magnitude band are dropped (bounds memory);
- candidates that cannot beat the goal's best known cost are dropped.
None of these is an error; they are expected pruning decisions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple

from min_expression.config import SearchConfig
from min_expression.domain import Number, NumericDomain
from min_expression.errors import SearchInvariantError
from min_expression.expression import ExpressionNode, make_leaf
from min_expression.generator import CandidateGenerator
from min_expression.render import ExpressionRenderer
from min_expression.store import ClosedStore, Frontier


class SearchStatus(Enum):
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    STOPPED = "stopped"


@dataclass
class LevelRecord:
    """Frontier statistics when the search moved to a new cost level."""
    cost: int
    open_count: int
    level_size: int
    stale_count: int
    closed_count: int


@dataclass
class SearchHistory:
    """Records the search trajectory for analysis."""
    levels: List[LevelRecord] = field(default_factory=list)
    witnesses: List[Tuple[int, str]] = field(default_factory=list)
    pruned: int = 0


@dataclass
class SearchState:
    """All mutable state of one run. Owned by exactly one SearchEngine."""
    goal: Number
    best_term_count: int
    frontier: Frontier = field(default_factory=Frontier)
    closed: ClosedStore = field(default_factory=ClosedStore)
    goal_found: bool = False

    def lookup_best_known(self, value: Number) -> ExpressionNode:
        """Settled node for `value`, or its current frontier node."""
        if value in self.closed:
            return self.closed.get(value)
        return self.frontier.get(value)


@dataclass
class SearchResult:
    """Outcome of a run: a minimal expression, or the reason there is none."""
    status: SearchStatus
    goal: Number
    term_count: Optional[int] = None
    expression: Optional[str] = None
    postfix: Optional[List[str]] = None
    reason: Optional[str] = None
    steps: int = 0
    closed_count: int = 0
    open_count: int = 0
    history: SearchHistory = field(default_factory=SearchHistory)

    @property
    def succeeded(self) -> bool:
        return self.status is SearchStatus.SUCCEEDED

    def summary(self) -> str:
        """Human-readable summary of the search outcome."""
        lines = [
            "═" * 60,
            "  Minimal Expression — Search Result",
            "═" * 60,
            f"  Goal:        {self.goal}",
            f"  Status:      {self.status.value}",
        ]
        if self.expression is not None:
            lines.append(f"  Expression:  {self.goal} = {self.expression}")
            lines.append(f"  RPN:         {' '.join(self.postfix or [])}")
            lines.append(f"  Terms:       {self.term_count}")
        if self.reason is not None:
            lines.append(f"  Reason:      {self.reason}")
        lines += [
            f"  Steps:       {self.steps}",
            f"  Closed:      {self.closed_count}",
            f"  Open:        {self.open_count}",
            f"  Levels:      {len(self.history.levels)}",
            "═" * 60,
        ]
        return "\n".join(lines)


class SearchEngine:
    """
    Uniform-cost search over values reachable from the seeds.

    Parameters
    ----------
    config : SearchConfig
        Seeds, goal, numeric domain, magnitude band, operators and the
        progress-reporting options.
    """

    def __init__(self, config: SearchConfig):
        self.config = config
        self.domain: NumericDomain = config.domain
        self.generator = CandidateGenerator(config.domain, config.operators)
        self.state: Optional[SearchState] = None
        self.reset()

    # --- setup --------------------------------------------------------------

    def reset(self) -> None:
        """Start over with fresh stores and the seeds on the frontier."""
        self.state = SearchState(
            goal=self.config.goal,
            best_term_count=self.config.initial_term_bound,
        )
        self.renderer = ExpressionRenderer(self.state.lookup_best_known, self.domain)
        self.history = SearchHistory()
        self.status = SearchStatus.RUNNING
        self.steps = 0
        self._next_print = self.config.progress_every
        for seed in self.config.seeds:
            self.provide(seed)
        if not self.state.goal_found and not self.config.band.contains(self.state.goal):
            # Discover drops every out-of-band value, the goal included.
            self.status = SearchStatus.FAILED

    def provide(self, value: Number) -> ExpressionNode:
        """Put a leaf for `value` on the frontier."""
        state = self.state
        if self.domain.matches(value, state.goal, self.config.epsilon):
            value = state.goal
        leaf = make_leaf(value)
        state.frontier.insert_or_improve(leaf)
        if value == state.goal and not state.goal_found:
            self._tighten(leaf)
        return leaf

    # --- candidate filtering ------------------------------------------------

    def discover(self, node: ExpressionNode) -> bool:
        """
        Offer a generated candidate to the frontier.

        Returns True if the candidate passed every filter.
        """
        state = self.state
        goal = state.goal
        value = node.value

        if (self.domain is NumericDomain.REAL and value != goal
                and self.domain.matches(value, goal, self.config.epsilon)):
            node = node.with_value(goal)
            value = goal

        if value in state.closed:
            return False
        if not self.config.band.contains(value):
            return False
        if node.term_count >= state.best_term_count:
            # Can't possibly yield a better expression for the goal.
            return False

        state.frontier.insert_or_improve(node)
        if value == goal:
            self._tighten(node)
        return True

    def _tighten(self, node: ExpressionNode) -> None:
        """A cheaper expression for the goal was found."""
        state = self.state
        state.best_term_count = node.term_count
        state.goal_found = True
        pruned = state.frontier.prune(node.term_count, keep=state.goal)
        self.history.pruned += pruned

        expression = self.renderer.infix(state.goal)
        self.history.witnesses.append((node.term_count, expression))
        if self.config.verbose:
            print(f"One way ({node.term_count} terms) = {expression}")

    # --- main loop ----------------------------------------------------------

    def step(self) -> SearchStatus:
        """Settle one node and expand it. Returns the status afterwards."""
        if self.status is not SearchStatus.RUNNING:
            return self.status

        state = self.state
        if not state.frontier:
            self.status = SearchStatus.FAILED
            return self.status

        previous_level = state.frontier.level
        node = state.frontier.extract_min()
        # Settle first, so the node is combined with itself too.
        state.closed.add(node)
        self.steps += 1
        if node.term_count != previous_level:
            self._record_level(node.term_count)
        self._report(node)

        if node.value == state.goal:
            state.goal_found = True
            state.best_term_count = node.term_count
            self.status = SearchStatus.SUCCEEDED
            return self.status

        self._expand(node)

        # Only go on while at least one more term could be shaved off.
        if state.best_term_count <= node.term_count + 1:
            self.status = (SearchStatus.SUCCEEDED if state.goal_found
                           else SearchStatus.FAILED)
        return self.status

    def _expand(self, node: ExpressionNode) -> None:
        state = self.state
        generate = self.generator.generate
        discover = self.discover
        max_peer_cost = state.best_term_count - node.term_count - 1
        for peer in state.closed.peers(max_peer_cost):
            # Peers come cheapest first, and the bound may tighten meanwhile.
            if node.term_count + peer.term_count >= state.best_term_count:
                break
            for candidate in generate(node, peer):
                discover(candidate)

    def run(self, should_stop: Optional[Callable[[], bool]] = None) -> SearchResult:
        """
        Run the search to completion.

        Parameters
        ----------
        should_stop : Callable, optional
            Checked before every pop; returning True ends the run with
            status STOPPED. Does not affect what has been settled so far.

        Returns
        -------
        SearchResult
        """
        while self.status is SearchStatus.RUNNING:
            if should_stop is not None and should_stop():
                self.status = SearchStatus.STOPPED
                break
            self.step()

        if self.config.verbose:
            if self.status is SearchStatus.SUCCEEDED:
                print(f"Done after {len(self.state.closed)} steps.  Turns out, "
                      f"you need only {self.state.best_term_count} terms to "
                      f"build {self.state.goal}:")
            elif self.status is SearchStatus.FAILED:
                print("Goal can't be reached with the current configuration.")
        return self.result()

    # --- reporting ----------------------------------------------------------

    def result(self) -> SearchResult:
        """Snapshot of the current outcome."""
        state = self.state
        result = SearchResult(
            status=self.status,
            goal=state.goal,
            steps=self.steps,
            closed_count=len(state.closed),
            open_count=len(state.frontier),
            history=self.history,
        )

        if state.goal_found and self.status is not SearchStatus.FAILED:
            counted = self.renderer.term_count(state.goal)
            if counted != state.best_term_count:
                raise SearchInvariantError(
                    f"goal expression has {counted} terms but the bound is "
                    f"{state.best_term_count}"
                )
            result.term_count = state.best_term_count
            result.expression = self.renderer.infix(state.goal)
            result.postfix = self.renderer.postfix(state.goal)

        if self.status is SearchStatus.FAILED:
            result.reason = "unreachable"
        elif self.status is SearchStatus.STOPPED:
            result.reason = "stopped"
        return result

    def _record_level(self, cost: int) -> None:
        state = self.state
        record = LevelRecord(
            cost=cost,
            open_count=len(state.frontier),
            level_size=state.frontier.level_size(),
            stale_count=state.frontier.stale_count,
            closed_count=len(state.closed),
        )
        self.history.levels.append(record)
        if self.config.verbose:
            print(f"Now at level {cost} ({record.open_count} open, "
                  f"{record.level_size} of that on current level)")

    def _report(self, node: ExpressionNode) -> None:
        state = self.state
        if self.config.verbose and self.steps == self._next_print:
            print(f"Expanding {node.value} at depth {node.term_count}, "
                  f"{len(state.frontier)} open "
                  f"({state.frontier.level_size()} on current level), "
                  f"{len(state.closed)} closed.")
            self._next_print = (self._next_print * 3) // 2
        if self.config.callback is not None:
            self.config.callback(self.steps, node, state)
