#!/usr/bin/env python3
"""
Demo: Run the example Flash programs.

Shows the step-driven engine end to end:
1. A counting loop (calculate / if / goto)
2. An interactive program answered with canned input
3. The control-flow diagram of the loop
"""

from flashlang.backends import DotMode, generate_dot
from flashlang.engine import Interpreter
from flashlang.examples import GREETING, build_counting_loop
from flashlang.model import Program


def main():
    print("=" * 80)
    print("FLASH INTERPRETER DEMO")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Counting loop
    # =========================================================================
    print("\n1. COUNTING LOOP:")
    print("-" * 80)
    interp = Interpreter(on_output=lambda line: print(f"   {line}"))
    interp.run(build_counting_loop(stop=5))
    steps = interp.run_until_blocked()
    print(f"   ✓ Finished in {steps} steps")

    # =========================================================================
    # STEP 2: Interactive program
    # =========================================================================
    print("\n2. GREETING (answers: Ada, 36):")
    print("-" * 80)
    interp = Interpreter(on_output=lambda line: print(f"   {line}"))
    interp.run(GREETING)
    for answer in ["Ada", "36"]:
        interp.run_until_blocked()
        interp.deliver_input(answer)
    interp.run_until_blocked()

    # =========================================================================
    # STEP 3: Diagram
    # =========================================================================
    print("\n3. CONTROL FLOW (DETAILED):")
    print("-" * 80)
    dot_output = generate_dot(Program.from_text(build_counting_loop()), mode=DotMode.DETAILED)
    for line in dot_output.split('\n'):
        print(f"   {line}")

    print("\n" + "=" * 80)
    print("To visualize the diagram:")
    print("  flashlang dot program.flash --mode detailed -o program.dot")
    print("  dot -Tpng program.dot -o program.png")
    print("=" * 80)


if __name__ == "__main__":
    main()
