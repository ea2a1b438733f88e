"""Entry point: jobs | people."""

import sys

USAGE = """Usage:
  python -m introlink.main jobs <keywords...> [--location L] [--company C]
      [--work-arrangement Remote] [--seniority-level Mid-Senior]
      [--employment-type Full-time] [--date-posted "Past week"]
      [--easy-apply-only] [--limit N]
  python -m introlink.main people <company...> [--role R] [--limit N] [--enrich-contacts]
  python -m introlink.main people --query "<free text>" [--limit N]"""


def main():
    if len(sys.argv) < 2 or sys.argv[1].lower() in ("-h", "--help", "help"):
        print(USAGE)
        sys.exit(0 if len(sys.argv) >= 2 else 2)

    mode = sys.argv[1].lower()
    if mode in ("jobs", "people"):
        from introlink.interfaces.oneshot import main as run_oneshot_main

        sys.exit(run_oneshot_main(domain=mode, args=sys.argv[2:]))

    print(f"Unknown mode: {mode}")
    print(USAGE)
    sys.exit(2)


if __name__ == "__main__":
    main()
