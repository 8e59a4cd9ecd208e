"""
Quick start example for min_expression.

Demonstrates the core workflow:
1. Pick a goal and a few seed values
2. Use the Solver to find the cheapest expression
3. Inspect the result and check it independently
"""

from min_expression import Solver, evaluate_postfix


def main():
    seeds = [3, 7]
    goal = 100

    print("min_expression — Quick Start")
    print("=" * 50)
    print(f"Seeds: {seeds}")
    print(f"Goal:  {goal}")
    print()

    # --- Search ---
    solver = Solver(max_magnitude=500)

    print("Searching...")
    result = solver.solve(seeds, goal, verbose=True)

    # --- Print results ---
    print()
    print(result.summary())

    # --- Check the answer from the RPN form alone ---
    if result.succeeded:
        value = evaluate_postfix(result.postfix)
        print(f"\n  RPN evaluates to: {value}")

    # --- Real-valued mode ---
    real = Solver(domain="real", max_magnitude=100).solve([3, 4], 0.75)
    print(f"\n  0.75 = {real.expression}  ({real.term_count} terms)")


if __name__ == "__main__":
    main()
