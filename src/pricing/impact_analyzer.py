from __future__ import annotations

import argparse
import logging
from decimal import Decimal, InvalidOperation

from core.units import format_balance, parse_units

from .price_impact import PriceImpactAnalyzer
from .v2_library import ReservePair

logger = logging.getLogger(__name__)


def _parse_sizes(value: str, decimals: int) -> list[int]:
    sizes = []
    for chunk in value.split(","):
        text = chunk.strip().replace("_", "")
        if text == "":
            continue
        sizes.append(parse_units(text, decimals))
    return sizes


def _print_table(
    rows: list[dict],
    reserves: ReservePair,
    decimals_in: int,
    decimals_out: int,
) -> None:
    print("Price Impact Analysis")
    print(
        f"Reserves: {format_balance(reserves.reserve_in, decimals_in, 4)} in / "
        f"{format_balance(reserves.reserve_out, decimals_out, 4)} out"
    )
    print("")

    columns = ["Amount In", "Amount Out", "Impact", "Severity"]
    widths = [16, 16, 10, 10]
    sep = "┌" + "┬".join("─" * w for w in widths) + "┐"
    mid = "├" + "┼".join("─" * w for w in widths) + "┤"
    end = "└" + "┴".join("─" * w for w in widths) + "┘"

    def row(values: list[str]) -> str:
        padded = [values[i].rjust(widths[i]) for i in range(len(values))]
        return "│" + "│".join(padded) + "│"

    print(sep)
    print(row(columns))
    print(mid)
    for entry in rows:
        print(
            row(
                [
                    format_balance(entry["amount_in"], decimals_in, 4),
                    format_balance(entry["amount_out"], decimals_out, 6),
                    f"{entry['price_impact_pct']:.2f}%",
                    entry["severity"].value,
                ]
            )
        )
    print(end)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Constant-product price impact table")
    parser.add_argument(
        "--reserve-in", required=True, type=int, help="Input-side reserve (raw units)"
    )
    parser.add_argument(
        "--reserve-out", required=True, type=int, help="Output-side reserve (raw units)"
    )
    parser.add_argument(
        "--sizes",
        required=True,
        help="Comma-separated list of human amounts (e.g. 1000,10000,100000)",
    )
    parser.add_argument("--decimals-in", type=int, default=18)
    parser.add_argument("--decimals-out", type=int, default=18)
    parser.add_argument(
        "--max-impact",
        default="1",
        help="Max impact percentage for max-size search (default 1)",
    )
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.reserve_in < 0 or args.reserve_out < 0:
        raise SystemExit("reserves must be non-negative")
    reserves = ReservePair(args.reserve_in, args.reserve_out)
    if reserves.is_empty:
        logger.warning("Pool has no liquidity; every trade quotes zero output")

    try:
        sizes = _parse_sizes(args.sizes, args.decimals_in)
    except ValueError as exc:
        raise SystemExit(f"invalid --sizes: {exc}") from exc

    try:
        max_impact = float(Decimal(args.max_impact))
    except InvalidOperation as exc:
        raise SystemExit(f"invalid --max-impact: {args.max_impact}") from exc

    analyzer = PriceImpactAnalyzer(reserves)
    rows = analyzer.generate_impact_table(sizes)
    _print_table(rows, reserves, args.decimals_in, args.decimals_out)

    max_size = analyzer.find_max_size_for_impact(max_impact)
    print("")
    print(
        f"Max trade for {args.max_impact}% impact: "
        f"{format_balance(max_size, args.decimals_in, 4)}"
    )


if __name__ == "__main__":
    main()
