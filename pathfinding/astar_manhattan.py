# pathfinding/astar_manhattan.py
from .astar import AStarPlanner, manhattan_heuristic

# Same search loop as AStar, informed by the 4-connected grid distance.
ALGORITHM = AStarPlanner(heuristic=manhattan_heuristic, name="AStarManhattan")
