import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from ptax.bimonth import BimonthlyRateService
from ptax.config import Settings
from ptax.providers import RateProviderError


async def main() -> int:
    parser = argparse.ArgumentParser(description="Query the PTAX rate for the current bimonth")
    parser.add_argument("--info", action="store_true", help="Only show the current bimonth, no provider call")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show fetch and retry logs")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    service = BimonthlyRateService.from_settings(Settings())

    info = service.get_current_period_info()
    print(f"Bimonth: {info.key} ({info.display_name}), starts {info.start_date_display}")
    if args.info:
        return 0

    try:
        rate = await service.get_current_rate()
    except RateProviderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Sell rate: R$ {rate.sell_rate:.4f}")
    print(f"Buy rate: R$ {rate.buy_rate:.4f}")
    print(f"Reference date: {rate.reference_date:%d/%m/%Y}")
    print(f"Quotation date: {rate.quotation_date:%d/%m/%Y} ({rate.quotation_timestamp})")
    print(f"Source: {rate.source_label}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
