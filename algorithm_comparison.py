import csv
from dataclasses import dataclass
from typing import List, Optional

from maze_generator import MazeGenerator
from maze_runner import solve_all


@dataclass
class Category:
    name: str
    height: int
    width: int


# Maze size categories
CATEGORIES = [
    Category('small', 21, 21),
    Category('medium', 63, 63),
    Category('large', 127, 127),
    Category('wide', 31, 151),
]


def run_category(cat: Category, seed: int):
    """Generate one maze for a category and solve it with every finder."""
    gen = MazeGenerator(cat.height, cat.width, seed=seed)
    grid = gen.generate()
    return gen, solve_all(grid, gen.entrance, gen.exit)


def main(runs_per_category: int = 100,
         csv_filename: str = 'maze_comparison_results.csv',
         categories: Optional[List[Category]] = None) -> str:
    categories = categories or CATEGORIES

    with open(csv_filename, 'w', newline='') as f:
        fieldnames = [
            'size_category', 'height', 'width', 'seed', 'algorithm',
            'execution_time', 'operations', 'success', 'path_length', 'agrees_with_astar'
        ]
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()

        for ci, cat in enumerate(categories):
            print(f"\nCategory {cat.name} • {cat.height}x{cat.width} • {runs_per_category} runs")
            for i in range(runs_per_category):
                # Unique seed per maze per category
                seed = 500000 + ci * 10000 + i
                gen, results = run_category(cat, seed)
                reference = results["A*"]["path"]
                print(f"  run {i+1:03d}: seed={seed} path_len={results['A*']['path_length']}")

                for name, res in results.items():
                    writer.writerow({
                        'size_category': cat.name,
                        'height': gen.height,
                        'width': gen.width,
                        'seed': seed,
                        'algorithm': name,
                        'execution_time': round(res['execution_time'], 6),
                        'operations': '' if res['operations'] is None else int(res['operations']),
                        'success': bool(res['success']),
                        'path_length': res['path_length'],
                        # the maze is a tree, so every finder must return the same path
                        'agrees_with_astar': res['path'] == reference,
                    })
                f.flush()

    print(f"\nComparison complete! Results saved to {csv_filename}")
    return csv_filename


if __name__ == "__main__":
    main()
