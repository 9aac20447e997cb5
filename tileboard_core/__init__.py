"""
Tileboard core Python package.

Pure game logic for a sliding-tile merge board, kept free of rendering and
input handling so hosts (the Flask app, the CLI, tests) drive it directly.
Modules:
- grid.py: Direction, Cell, Grid
- ranks.py: RankState, RankTable
- tile.py: Tile
- rng.py: RandomRange
- moves.py: traversal order, merge legality, merge outcome selection
- engine.py: TileBoard (move / settle / game over)
"""
