"""
Logic-based agent for Cleansweeper.

Uses constraint propagation with subset reduction to find certain
mines (to flag) and certain safe cells (to open) without guessing
when possible.
"""
from typing import Optional, Set, Tuple, Dict, List, FrozenSet
from dataclasses import dataclass
from collections import defaultdict

import numpy as np

from .base_agent import BaseAgent


# ============================================================================
# Constraint Types
# ============================================================================

@dataclass(frozen=True)
class Constraint:
    """
    A constraint representing: sum of cells in 'cells' == mine_count.

    An opened cell already shows only its unflagged mines, so a "2" with
    hidden neighbors {A, B, C} gives cells={A, B, C}, mine_count=2.
    """

    cells: FrozenSet[Tuple[int, int]]
    mine_count: int


# ============================================================================
# Logic Agent
# ============================================================================

class LogicAgent(BaseAgent):
    """
    Agent that deduces moves from the visible counts.

    Strategy:
        1. Build constraints from all opened numbered cells
        2. Propagate them until no cell changes, with subset reduction
        3. Flag a certain mine (flags chord in Cleansweeper)
        4. Otherwise open a certain safe cell
        5. Otherwise open the cell with the lowest estimated mine chance
    """

    def __init__(
        self,
        board_height: int = 16,
        board_width: int = 16,
        torus: bool = False,
        mine_fraction: float = 0.25,
    ) -> None:
        """
        Initialize the logic agent.

        Args:
            board_height: Number of rows in the board.
            board_width: Number of columns in the board.
            torus: Whether the board edges wrap around.
            mine_fraction: Prior mine chance for cells no count touches.
        """
        super().__init__(board_height, board_width, torus)
        self.mine_fraction = mine_fraction

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select the best action using constraint propagation.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Best action index based on analysis.
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        if not np.any(valid_actions):
            return 0

        safe_cells, mine_cells = self.solve(observation)

        for row, col in sorted(mine_cells):
            action = self.flag_action(row, col)
            if valid_actions[action]:
                return action

        for row, col in sorted(safe_cells):
            action = self.open_action(row, col)
            if valid_actions[action]:
                return action

        return self._select_by_probability(observation, valid_actions, mine_cells)

    def _build_constraints(
        self, observation: np.ndarray
    ) -> List[Constraint]:
        """
        Build constraints from opened numbered cells.

        Each opened number N with hidden neighbors creates a constraint:
        "exactly N of these hidden cells are mines"
        """
        constraints = []

        for row in range(self.board_height):
            for col in range(self.board_width):
                value = int(observation[row, col])

                # Only process opened numbered cells (1-8)
                if value < 1 or value > 8:
                    continue

                hidden = self._hidden_neighbors(observation, row, col)

                # Skip inconsistent counts (more mines than hidden cells)
                if not hidden or value > len(hidden):
                    continue

                constraints.append(Constraint(
                    cells=frozenset(hidden),
                    mine_count=value,
                ))

        return constraints

    def solve(
        self, observation: np.ndarray
    ) -> Tuple[Set[Tuple[int, int]], Set[Tuple[int, int]]]:
        """
        Propagate constraints to find definite safe and mine cells.

        Returns:
            Tuple of (safe_cells, mine_cells) sets.
        """
        safe_cells: Set[Tuple[int, int]] = set()
        mine_cells: Set[Tuple[int, int]] = set()

        constraints = self._build_constraints(observation)

        changed = True
        iterations = 0
        max_iterations = 100

        while changed and iterations < max_iterations:
            changed = False
            iterations += 1

            new_constraints = []
            for constraint in constraints:
                remaining_cells = constraint.cells - safe_cells - mine_cells
                remaining_mines = constraint.mine_count - len(constraint.cells & mine_cells)

                if not remaining_cells:
                    continue

                if remaining_mines == 0:
                    safe_cells.update(remaining_cells)
                    changed = True
                    continue

                if remaining_mines == len(remaining_cells):
                    mine_cells.update(remaining_cells)
                    changed = True
                    continue

                new_constraints.append(Constraint(
                    cells=frozenset(remaining_cells),
                    mine_count=remaining_mines,
                ))

            constraints = new_constraints

            subset_safe, subset_mines, constraints = self._subset_reduction(constraints)
            if subset_safe - safe_cells or subset_mines - mine_cells:
                safe_cells.update(subset_safe)
                mine_cells.update(subset_mines)
                changed = True

        return safe_cells, mine_cells

    def _subset_reduction(
        self, constraints: List[Constraint]
    ) -> Tuple[Set[Tuple[int, int]], Set[Tuple[int, int]], List[Constraint]]:
        """
        Apply subset reduction to find additional deductions.

        If constraint A's cells are a strict subset of constraint B's cells,
        the difference (B - A) holds (B.mines - A.mines) mines.

        Example:
            A: {X, Y} has 1 mine
            B: {X, Y, Z} has 1 mine
            -> Z must be safe
        """
        safe_cells: Set[Tuple[int, int]] = set()
        mine_cells: Set[Tuple[int, int]] = set()
        new_constraints: List[Constraint] = []

        for i, c1 in enumerate(constraints):
            for c2 in constraints[i + 1:]:
                if c1.cells < c2.cells:
                    smaller, larger = c1, c2
                elif c2.cells < c1.cells:
                    smaller, larger = c2, c1
                else:
                    continue

                diff_cells = larger.cells - smaller.cells
                diff_mines = larger.mine_count - smaller.mine_count

                if diff_mines == 0:
                    safe_cells.update(diff_cells)
                elif diff_mines == len(diff_cells):
                    mine_cells.update(diff_cells)
                elif 0 < diff_mines < len(diff_cells):
                    new_constraints.append(Constraint(
                        cells=frozenset(diff_cells),
                        mine_count=diff_mines,
                    ))

        # Deduplicate constraints, keeping order
        result_constraints = list(dict.fromkeys(constraints + new_constraints))

        return safe_cells, mine_cells, result_constraints

    def _hidden_neighbors(
        self, observation: np.ndarray, row: int, col: int
    ) -> Set[Tuple[int, int]]:
        """Hidden cells around (row, col)."""
        return {
            (nr, nc) for nr, nc in self.neighbors(row, col)
            if observation[nr, nc] == -1
        }

    def _select_by_probability(
        self,
        observation: np.ndarray,
        valid_actions: np.ndarray,
        known_mines: Set[Tuple[int, int]],
    ) -> int:
        """Open the valid cell with lowest estimated mine probability."""
        probabilities = self.estimate_mine_probabilities(observation, known_mines)

        best_action = None
        best_prob = 2.0

        for action in np.where(valid_actions[: self.total_cells])[0]:
            row, col = self.action_to_position(int(action))
            if (row, col) in known_mines:
                continue
            prob = probabilities.get((row, col), self.mine_fraction)
            if prob < best_prob:
                best_prob = prob
                best_action = int(action)

        if best_action is None:
            # Only known mines left hidden; flag one of them
            return int(np.where(valid_actions)[0][-1])
        return best_action

    def estimate_mine_probabilities(
        self,
        observation: np.ndarray,
        known_mines: Set[Tuple[int, int]],
    ) -> Dict[Tuple[int, int], float]:
        """
        Estimate mine probability for each constrained hidden cell.

        Returns:
            Dict mapping (row, col) to probability of being a mine.
        """
        probabilities: Dict[Tuple[int, int], List[float]] = defaultdict(list)

        for row in range(self.board_height):
            for col in range(self.board_width):
                value = int(observation[row, col])
                if value < 1 or value > 8:
                    continue

                hidden = self._hidden_neighbors(observation, row, col)
                unknown = hidden - known_mines
                remaining = value - len(hidden & known_mines)

                if not unknown or remaining < 0:
                    continue

                prob = remaining / len(unknown)
                for neighbor in unknown:
                    probabilities[neighbor].append(prob)

        # Take maximum (most conservative estimate)
        return {cell: max(probs) for cell, probs in probabilities.items()}
