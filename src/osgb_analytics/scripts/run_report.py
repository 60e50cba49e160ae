"""
Print the dashboard and report summaries for the current data.
Run with:
    python -m osgb_analytics.scripts.run_report
    python -m osgb_analytics.scripts.run_report --source csv --company 3 --start 2024-01-01 --end 2024-01-31
"""
import argparse
import logging
from osgb_analytics.analytics.aggregate import status_breakdown
from osgb_analytics.analytics.filters import ALL, FilterCriteria
from osgb_analytics.core.logging_setup import setup_logging
from osgb_analytics.services.dashboard import build_dashboard
from osgb_analytics.services.reports import SORT_FIELDS, build_report
from osgb_analytics.services.snapshot import load_from_csv, load_from_db
from osgb_analytics.transforms.common import parse_date, parse_int

log = logging.getLogger(__name__)

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="OSGB screening and document analytics")
    p.add_argument("--source", choices=("db", "csv"), default="db")
    p.add_argument("--company", default=ALL, help="company id or 'all'")
    p.add_argument("--status", default=ALL)
    p.add_argument("--type", default=ALL)
    p.add_argument("--start", help="YYYY-MM-DD")
    p.add_argument("--end", help="YYYY-MM-DD")
    p.add_argument("--search", default="")
    p.add_argument("--sort", choices=SORT_FIELDS, default="date")
    p.add_argument("--desc", action="store_true")
    return p.parse_args(argv)

def criteria_from_args(args) -> FilterCriteria:
    company = ALL if args.company == ALL else parse_int(args.company)
    if company is None:
        raise ValueError(f"Invalid company id: {args.company!r}")
    return FilterCriteria(
        company_id=company,
        status=args.status,
        type=args.type,
        date_start=parse_date(args.start),
        date_end=parse_date(args.end),
        search_text=args.search,
    )

def main(argv=None):
    args = parse_args(argv)
    criteria = criteria_from_args(args)
    snapshot = load_from_db() if args.source == "db" else load_from_csv(write_logs=True)

    dash = build_dashboard(snapshot, criteria=criteria)
    s = dash.summary
    print(f"\nOSGB dashboard for {dash.today:%Y-%m-%d}")
    print(f"  Screenings: {s.total} ({s.total_participants} participants, avg {s.avg_participants})")
    print(f"  Completion rate: {s.completion_rate}%  Cancellation rate: {s.cancellation_rate}%")
    for status, count in status_breakdown(s):
        print(f"    {status}: {count}")
    sign = "+" if dash.weekly.is_positive else ""
    print(f"  This week: {dash.weekly.current_count} ({sign}{dash.weekly.change_percent}% vs last week)")
    print(f"  Monthly target: {dash.monthly_target.current}/{dash.monthly_target.target} "
          f"({dash.monthly_target.progress}%)")
    print(f"  Documents: {dash.documents.total}, expiring soon {dash.documents.expiring_within_30_days}, "
          f"expired {dash.documents.expired_count}")
    for alert in dash.alerts:
        print(f"  [{alert.level.upper()}] {alert.title}: {alert.message}")

    report = build_report(snapshot, criteria, sort_by=args.sort, descending=args.desc, year=dash.today.year)
    print("\nTop companies:")
    for c in report.top_companies:
        print(f"  {c.name}: {c.count} screenings, {c.participants} participants")
    if report.trend is not None:
        print(f"\nPrevious period: {report.trend.previous_count} -> {report.trend.current_count} "
              f"({report.trend.change_percent}%)")

if __name__ == "__main__":
    setup_logging()
    log.info("Starting OSGB report")
    main()
