import argparse
import sys

STAGES = {
    "serp": "SERP results for every query/country/language/page",
    "trends": "Google Trends interest over time per country",
    "all": "both of the above",
}


def run_stage(name, extra=None):
    from polo_collector.cli import collect_cli

    if name not in STAGES:
        print("❌ Stage not found.")
        return 1
    return collect_cli.main(["--only", name, *(extra or [])])


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--stage", help="Run specific stage by name")
    args, rest = parser.parse_known_args()

    if args.stage:
        sys.exit(run_stage(args.stage, rest))
    else:
        print("✅ Available stages:")
        for key, desc in STAGES.items():
            print(f" - {key}: {desc}")
