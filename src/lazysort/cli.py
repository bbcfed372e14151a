import sys, argparse, itertools, time
import numpy as np
from lazysort.core import VERSION, SMALL_SORT_THRESHOLD, LazySort, Strategy

# ────────────────────── CLI self-test ─────────────────────
def _selftest() -> bool:
    ok = True

    def check(name, cond):
        nonlocal ok
        print(name, "OK" if cond else "FAIL")
        ok = ok and bool(cond)

    dup = [2, 4, 2, 5, 8, 4, 3, 4, 6]
    for s in Strategy:
        check(f"duplicates[{s.value}]",
              list(LazySort(dup, strategy=s)) == [2, 2, 3, 4, 4, 4, 5, 6, 8]
              and list(LazySort(dup, strategy=s, reverse=True)) == [8, 6, 5, 4, 4, 4, 3, 2, 2])

    rng = np.random.default_rng(1)
    for n in (SMALL_SORT_THRESHOLD, SMALL_SORT_THRESHOLD + 1, 10_000):
        src = rng.integers(0, n // 2 + 1, size=n)
        want = np.sort(src).tolist()
        check(f"n={n}", all(list(LazySort(src, strategy=s)) == want for s in Strategy))

    srt = LazySort(dup)
    hints = []
    for _ in range(len(dup) + 2):
        hints.append(srt.size_hint())
        next(srt, None)
    check("size-hint", hints == [(max(len(dup) - i, 0),) * 2 for i in range(len(dup) + 2)])
    return ok

# ────────────────────── main / args ───────────────────────
def main(argv=None) -> int:
    # ── CLI ────────────────────────────────────────────────────────────────
    ap = argparse.ArgumentParser(description="lazysort: produce the first k of n values in order")
    ap.add_argument("--selftest", action="store_true",
                    help="run built-in sanity checks and exit")

    # core algo settings
    ap.add_argument("--strategy",  type=Strategy, choices=list(Strategy),
                    default=Strategy.QUICK, help="Lazy sort strategy")
    ap.add_argument("--reverse",   action="store_true",
                    help="Produce largest values first")
    ap.add_argument("--threshold", type=int, default=SMALL_SORT_THRESHOLD,
                    help="Pool size at or below which insertion sort is used")
    ap.add_argument("--seed",      type=int, default=None,
                    help="Seed for the input generator (None for fresh entropy)")

    # quality-of-life
    ap.add_argument("--count",    type=int, default=1_000_000,
                    help="How many random doubles to generate (default 1 000 000)")
    ap.add_argument("--take",     type=int, default=10,
                    help="How many values to produce (default 10)")
    ap.add_argument("--verify-sorted", action="store_true",
                    help="Abort on first out-of-order value and check against numpy.sort")
    ap.add_argument("--progress", action="store_true",
                    help="Print progress every 5 % (≥5 s interval)")

    args = ap.parse_args(argv)

    # ── self-test ──────────────────────────────────────────────────────────
    if args.selftest:
        return 0 if _selftest() else 1

    if args.count < 0 or args.take < 0:
        ap.error("--count and --take must be non-negative")

    # ── create synthetic input ─────────────────────────────────────────────
    rng_np = np.random.default_rng(args.seed)
    src    = rng_np.standard_normal(args.count)
    want   = min(args.take, args.count)

    # ── construct sorter ───────────────────────────────────────────────────
    sorter_options = dict(
        strategy  = args.strategy,
        reverse   = args.reverse,
        threshold = args.threshold,
    )
    sorter = LazySort(src, **sorter_options)

    print(f"lazysort {VERSION} running with options: {sorter_options}")
    print(f"Producing {want:,} of {args.count:,} standard-normal values…")

    # ── main loop with optional verification & progress ────────────────────
    output_count   = 0
    next_milestone = max(want // 20, 1)             # 5 %
    last_ping      = time.monotonic()
    produced       = []

    last_val = float("inf") if args.reverse else -float("inf")

    for val in itertools.islice(sorter, want):
        produced.append(val)

        if args.verify_sorted and (val > last_val if args.reverse else val < last_val):
            raise RuntimeError(f"Out-of-order value at index {output_count}: "
                               f"{val} after {last_val}")
        last_val = val
        output_count += 1

        if args.progress and output_count >= next_milestone:
            now = time.monotonic()
            if now - last_ping >= 5:
                pct = 100.0 * output_count / want
                print(f"{pct:5.1f}%  ({output_count:,}/{want:,})")
                last_ping = now
            next_milestone += max(want // 20, 1)

    # ── summary ────────────────────────────────────────────────────────────
    remaining = sorter.size_hint()[0]
    print(f"Done. Produced {output_count:,} values, {remaining:,} still pending.")

    if produced:
        print("First 10 values:", [f"{x:.3f}" for x in produced[:10]])

    if args.verify_sorted:
        ref = np.sort(src)
        if args.reverse:
            ref = ref[::-1]
        if not np.array_equal(np.asarray(produced, dtype=np.float64), ref[:output_count]):
            raise RuntimeError("Produced prefix differs from numpy.sort")
        print("Order verified – prefix matches numpy.sort.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
