"""
Management command to seed the restaurant catalog.

Usage:
    python manage.py load_sample_restaurants [--clear]
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.restaurants.models import Restaurant


SAMPLE_RESTAURANTS = [
    {'name': '순이', 'category': '면류', 'description': '해산물 라멘 전문점'},
    {'name': '맘스터치', 'category': '햄버거', 'description': '국내 햄버거 체인점'},
    {'name': '상해교자', 'category': '중식', 'description': '만두 전문 중식당'},
    {'name': '해오름', 'category': '한식', 'description': '한식 정식 전문점'},
    {'name': '탐솥', 'category': '한식', 'description': '솥밥 전문점'},
]


class Command(BaseCommand):
    help = 'Load sample restaurants into the catalog'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete restaurants not referenced by any meeting before loading',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            deleted, _ = Restaurant.objects.filter(
                selected_for_meetings__isnull=True,
                meeting_candidacies__isnull=True,
            ).delete()
            self.stdout.write(f'Removed {deleted} row(s)')

        created = 0
        for data in SAMPLE_RESTAURANTS:
            _, was_created = Restaurant.objects.get_or_create(
                name=data['name'],
                defaults={
                    'category': data['category'],
                    'description': data['description'],
                },
            )
            created += int(was_created)

        self.stdout.write(self.style.SUCCESS(
            f'Loaded {created} new restaurant(s), {len(SAMPLE_RESTAURANTS) - created} already present'
        ))
