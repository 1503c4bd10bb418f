"""
Example Flash programs.

Small, complete programs that exercise every command: a counting loop
built from calculate/if/goto, an interactive greeting that suspends for
input, and a calculator that branches with else.
"""


def build_counting_loop(stop: int = 5, start: int = 1) -> str:
    """Count from ``start`` to ``stop`` inclusive, one number per line."""
    return "\n".join([
        f"store {start} in counter",
        "show counter",
        "calculate sum to counter from counter and 1",
        f"if counter isgreater {stop}",
        "goto 8",
        "endif",
        "goto 2",
        "show done",
    ])


GREETING = """\
get input for name with prompt What is your name?
show Hello
show name
get input for age with prompt How old are you?
calculate sum to next from age and 1
show next
"""


SAFE_DIVISION = """\
get input for a with prompt Dividend?
get input for b with prompt Divisor?
if b isequal 0
    show cannot divide by zero
else
    calculate quotient to result from a and b
    show result
endif
"""


def build_example_programs() -> dict:
    """All example programs keyed by name."""
    return {
        "counting_loop": build_counting_loop(),
        "greeting": GREETING,
        "safe_division": SAFE_DIVISION,
    }
