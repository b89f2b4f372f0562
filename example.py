#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

from lifegrid import GameOfLife, seed

GLIDER = [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)]


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    # Place a glider near the top-left corner of a 12x12 grid
    game = GameOfLife.from_grid(seed(12, 12, [(row + 1, col + 1) for row, col in GLIDER]))

    print("Initial state:")
    print(game.get_grid())
    print(f"Population: {game.population}")
    print()

    for _ in range(8):
        game.step()
        print(f"Generation {game.generation}:")
        print(game.get_grid())
        print(f"Population: {game.population}")
        print()

    # The glider eventually hits the clamped corner and settles
    final_gen, reason = game.run_until_stable(max_generations=200)
    print(f"Stopped at generation {final_gen}: {reason}")
    if game.cycle_detected:
        print(f"Cycle of length {game.cycle_length} from generation {game.cycle_start_generation}")
    print(f"Recent populations: {game.population_history[-5:]}")


if __name__ == "__main__":
    main()
