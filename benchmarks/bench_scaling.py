"""
Benchmark: parse time against input size.

Every cursor shares one input buffer and only moves an offset, so these
should all grow linearly.

Usage:
    python benchmarks/bench_scaling.py
"""

import timeit
from cursorparsec.Char import char, digit, letter, string
from cursorparsec.Combinators import sep_by
from cursorparsec.Cursor import LineCursor
from cursorparsec.Prim import many, many1, run_parser, token


def bench(parser, make_input, sizes: list[int], repeats: int = 5, **kwargs) -> dict[int, float]:
    results = {}
    for n in sizes:
        data = make_input(n)
        t = timeit.timeit(lambda: run_parser(parser, data, **kwargs), number=repeats)
        results[n] = t / repeats
    return results


def format_time(seconds: float) -> str:
    if seconds < 1e-3:
        return f"{seconds * 1e6:8.1f} us"
    elif seconds < 1:
        return f"{seconds * 1e3:8.2f} ms"
    else:
        return f"{seconds:8.3f}  s"


def print_results(name: str, results: dict[int, float]) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {name}")
    print(f"{'=' * 60}")
    print(f"  {'Size':>10}  {'Time':>12}  {'Ratio vs smallest':>18}")
    print(f"  {'-'*10}  {'-'*12}  {'-'*18}")

    baseline = list(results.values())[0]
    for size, elapsed in results.items():
        ratio = elapsed / baseline if baseline > 0 else 0
        print(f"  {size:>10,}  {format_time(elapsed)}  {ratio:>17.1f}x")


def main() -> None:
    sizes = [1_000, 5_000, 10_000, 50_000, 100_000]
    csv_sizes = [200, 1_000, 5_000, 10_000, 20_000]
    int_token = token(lambda t: isinstance(t, int), "<int>")

    print("cursorparsec scaling benchmark")
    print("=" * 60)

    suites = [
        ("many(char('a'))", many(char("a")), lambda n: "a" * n, sizes, {}),
        ("many(char('a')) over LineCursor", many(char("a")), lambda n: "a" * n, sizes,
         {"cursor": LineCursor}),
        ("many1(digit())", many1(digit()), lambda n: "1" * n, sizes, {}),
        ("sep_by (CSV-like)", sep_by(many1(letter()), char(",")),
         lambda n: ",".join("abcde" for _ in range(n)), csv_sizes, {}),
        ("string() match", string("hello"), lambda n: "hello" + "x" * n, sizes, {}),
        ("List[int] tokens", many(int_token), lambda n: list(range(n)), sizes, {}),
    ]

    for name, parser, make_input, sz, kwargs in suites:
        print_results(name, bench(parser, make_input, sz, **kwargs))

    print()


if __name__ == "__main__":
    main()
