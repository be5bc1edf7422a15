import json

from django.core.management.base import BaseCommand, CommandError

from insights.periods import ReportPeriod
from insights.services import calculate_planned_visits
from tenants.models import Agency


class Command(BaseCommand):
    help = "Print the planned-vs-executed visits report for one agency (default: month to date)"

    def add_arguments(self, parser):
        parser.add_argument("agency", help="Agency slug or id")
        parser.add_argument("--start", default="", help="YYYY-MM-DD or ISO timestamp")
        parser.add_argument("--end", default="", help="YYYY-MM-DD or ISO timestamp")
        parser.add_argument("--json", action="store_true", help="Emit the raw JSON report")

    def handle(self, *args, **opts):
        key = opts["agency"]
        agency = Agency.objects.filter(slug=key).first()
        if agency is None and key.isdigit():
            agency = Agency.objects.filter(pk=int(key)).first()
        if agency is None:
            raise CommandError(f"Agency not found: {key}")

        try:
            period = ReportPeriod.from_query({"startDate": opts["start"], "endDate": opts["end"]})
        except ValueError:
            raise CommandError("--start/--end must be ISO dates (YYYY-MM-DD)")

        result = calculate_planned_visits(agency, period)
        if not result.ok:
            raise CommandError(f"Report unavailable: {result.error}")
        report = result.report

        if opts["json"]:
            self.stdout.write(json.dumps(report.as_dict(), indent=2))
            return

        self.stdout.write(f"{agency.name}: {period.start_date} → {period.end_date} ({report.period_days} days)")
        for row in report.by_promoter:
            self.stdout.write(f"  {row['promoter_name']:<30} planned={row['planned']:>4} executed={row['executed']:>4}")
        self.stdout.write(
            self.style.SUCCESS(
                f"Planned {report.planned}, executed {report.executed} "
                f"({report.completion_rate}%), unprogrammed allocations: {report.unprogrammed_allocations}"
            )
        )
