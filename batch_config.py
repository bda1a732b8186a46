# batch_config.py
from __future__ import annotations

from typing import Dict, List, Any

# ---------------------------------------------------------------------------
# Parameter grid for batch_run.py
# ---------------------------------------------------------------------------
# PARAM_GRID runs every permutation (Cartesian product) of the values.
#
# Example:
#   "cols": [50, 100]
#   "rows": [50, 100]
# will generate 4 maze shapes:
#   (50x50), (50x100), (100x50), (100x100)
#
# Be careful: experiment count grows as
#   prod(len(v) for v in PARAM_GRID.values()).
#
# Runs execute one after another in a single process so timings are not
# disturbed by other benchmark workers.
PARAM_GRID: Dict[str, List[Any]] = {
    # --- meta ---
    "purpose": ["pathfinding_comparison"],  # free-text label for this batch

    # --- maze parameters ---
    "cols": [50, 100],           # generated maze width
    "rows": [50, 100],           # generated maze height
    "wall_density": [0.2, 0.3],  # probability that a cell is a wall

    # --- benchmark parameters (random mode) ---
    "attempts": [10],            # searches per timed block
    "searches": [20],            # successful searches to report per run

    # --- algorithms ---
    # "path_algo_name": ["AStar", "AStarManhattan", "BFS"],
    "path_algo_name": ["AStar", "AStarManhattan", "BFS"],

    # --- randomness ---
    "seed": [i for i in range(5)],  # seeds both the maze and the point sampling
}

OUTPUT_DIR = "outputs_batch"
OUTPUT_CSV = "batch_results.csv"
