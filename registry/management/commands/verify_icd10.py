from django.core.management.base import BaseCommand

from registry.models import ICD10Condition


class Command(BaseCommand):
    help = "Print ICD-10 node counts and a sample chapter."

    def add_arguments(self, parser):
        parser.add_argument('--code', default='I', help="Chapter code to inspect (default: I)")

    def handle(self, *args, **opts):
        total = ICD10Condition.objects.count()
        self.stdout.write(f"Total ICD-10 nodes: {total}")

        code = opts['code']
        chapter = ICD10Condition.objects.filter(code=code).first()
        if chapter is None:
            self.stdout.write(self.style.WARNING(f"Chapter {code} not found"))
            return
        self.stdout.write(f"Chapter {chapter.code}: {chapter.description}")
        children = chapter.children.order_by('code')
        self.stdout.write(f"Children: {children.count()}")
        first = children.first()
        if first is not None:
            self.stdout.write(f"First child: {first.code} {first.description}")
