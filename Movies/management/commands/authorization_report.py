from django.core.management.base import BaseCommand

from Movies.authorization.health import authorization_health_snapshot


class Command(BaseCommand):
    help = "Report registered authorization policies, handlers and permission authority status."

    def handle(self, *args, **options):
        snapshot = authorization_health_snapshot()
        self.stdout.write(f"Policies: {', '.join(snapshot['policies']) or '-'}")
        for entry in snapshot["handlers"]:
            self.stdout.write(
                f"  {entry['requirement']} on {entry['resource']} -> {entry['handler']}"
            )
        permissions = snapshot["permissions"]
        self.stdout.write(
            f"Permission authority: configured={permissions['configured']} "
            f"status={permissions['upstream'].get('status', 'ok')}"
        )
        if snapshot["healthy"]:
            self.stdout.write(self.style.SUCCESS("Authorization healthy."))
        else:
            missing = ", ".join(snapshot["missing_policies"]) or "-"
            self.stdout.write(
                self.style.WARNING(f"Authorization unhealthy. Missing policies={missing}")
            )
