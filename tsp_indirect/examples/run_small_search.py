import numpy as np

from tsp_indirect import LocalSearchConfig, TravellingSalesmanProblem


def main():
    coords = [(0, 0), (0, 2), (2, 2), (2, 0), (1, 3), (3, 1), (4, 4), (0, 4)]
    rng = np.random.default_rng(7)
    for max_sweeps in (1, None):
        problem = TravellingSalesmanProblem(coords, config=LocalSearchConfig(max_sweeps=max_sweeps))
        for _ in range(3):
            solution = problem.construct(problem.random_decision_vector(rng))
            before = solution.fitness
            solution.local_search()
            print(f"max_sweeps={max_sweeps}: {before} -> {solution.fitness}")
            solution.print()
        print(f"solutions constructed: {problem.tried_solutions}")


if __name__ == "__main__":
    main()
