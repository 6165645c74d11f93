import sys

from config import ReportConfig
from report import ReportError, run_report

if __name__ == "__main__":
    config = ReportConfig()
    print(f"reading data from {config.data_dir}, writing charts to {config.output_dir}")
    try:
        outputs = run_report(config)
    except ReportError as exc:
        # stop at the first failure and say which stage and file broke
        print(f"\nreport stopped during '{exc.stage}' ({exc.source})")
        print(f"error: {exc.cause}")
        sys.exit(1)

    print("\n*****************************")
    print(f"report finished, {len(outputs)} charts written:")
    for name, path in outputs.items():
        print(f"  {name}: {path}")
    print("*****************************")
