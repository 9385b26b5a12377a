import django.db.models.deletion
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('restaurants', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Meeting',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField()),
                ('time', models.TimeField()),
                ('week', models.PositiveSmallIntegerField(db_index=True)),
                ('type', models.CharField(choices=[('fixed', 'Fixed restaurant'), ('roulette', 'Roulette')], max_length=10)),
                ('status', models.CharField(choices=[('recruiting', 'Recruiting'), ('closed', 'Closed'), ('completed', 'Completed')], default='recruiting', max_length=12)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('host', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='hosted_meetings', to=settings.AUTH_USER_MODEL)),
                ('selected_restaurant', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='selected_for_meetings', to='restaurants.restaurant')),
            ],
            options={
                'db_table': 'meetings',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['week', 'status'], name='meetings_week_status_idx'),
                    models.Index(fields=['host', 'status'], name='meetings_host_status_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('status', 'recruiting')), fields=('host',), name='one_recruiting_meeting_per_host'),
                ],
            },
        ),
        migrations.CreateModel(
            name='MeetingCandidate',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('position', models.PositiveSmallIntegerField()),
                ('meeting', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='candidates', to='meetings.meeting')),
                ('restaurant', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='meeting_candidacies', to='restaurants.restaurant')),
            ],
            options={
                'db_table': 'meeting_candidates',
                'ordering': ['position'],
                'constraints': [
                    models.UniqueConstraint(fields=('meeting', 'restaurant'), name='unique_candidate_per_meeting'),
                    models.UniqueConstraint(fields=('meeting', 'position'), name='unique_candidate_position'),
                ],
            },
        ),
        migrations.CreateModel(
            name='MeetingParticipant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('role', models.CharField(choices=[('host', 'Host'), ('participant', 'Participant')], default='participant', max_length=12)),
                ('is_active', models.BooleanField(default=True)),
                ('joined_at', models.DateTimeField(auto_now_add=True)),
                ('meeting', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='participants', to='meetings.meeting')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='meeting_participations', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'meeting_participants',
                'ordering': ['joined_at'],
                'constraints': [
                    models.UniqueConstraint(fields=('meeting', 'user'), name='unique_participant_per_meeting'),
                    models.UniqueConstraint(condition=models.Q(('is_active', True)), fields=('user',), name='one_active_participation_per_user'),
                ],
            },
        ),
        migrations.CreateModel(
            name='MeetingVote',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('meeting', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='votes', to='meetings.meeting')),
                ('restaurant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='meeting_votes', to='restaurants.restaurant')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='meeting_votes', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'meeting_votes',
                'constraints': [
                    models.UniqueConstraint(fields=('meeting', 'user'), name='one_vote_per_user_per_meeting'),
                ],
            },
        ),
        migrations.CreateModel(
            name='RouletteResult',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('random_value', models.FloatField()),
                ('candidates', models.JSONField()),
                ('spun_at', models.DateTimeField(auto_now_add=True)),
                ('meeting', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='roulette_result', to='meetings.meeting')),
                ('selected_restaurant', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='roulette_wins', to='restaurants.restaurant')),
                ('spun_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='roulette_spins', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'roulette_results',
            },
        ),
    ]
