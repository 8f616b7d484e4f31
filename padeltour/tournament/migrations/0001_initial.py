import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


def _count_field():
    return models.IntegerField(
        default=0, validators=[django.core.validators.MinValueValidator(0)]
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Player',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date_created', models.DateTimeField(auto_now_add=True)),
                ('date_modified', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=255, unique=True)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('is_active', models.BooleanField(default=True)),
            ],
            options={
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Tournament',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date_created', models.DateTimeField(auto_now_add=True)),
                ('date_modified', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=255)),
                ('type', models.CharField(choices=[('ROUND_ROBIN', 'Round Robin'), ('KNOCKOUT', 'Knockout'), ('GROUP_STAGE_KNOCKOUT', 'Group Stage + Knockout')], default='ROUND_ROBIN', max_length=32)),
                ('allow_ties', models.BooleanField(default=False)),
                ('current_phase', models.PositiveIntegerField(default=1)),
                ('status', models.CharField(choices=[('created', 'Created'), ('in_progress', 'In Progress'), ('finished', 'Finished')], default='created', max_length=32)),
                ('win_points', models.FloatField(default=3)),
                ('draw_points', models.FloatField(default=1)),
                ('loss_points', models.FloatField(default=0)),
                ('champions', models.ManyToManyField(blank=True, related_name='titles', to='tournament.player')),
            ],
            options={
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='Match',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date_created', models.DateTimeField(auto_now_add=True)),
                ('date_modified', models.DateTimeField(auto_now=True)),
                ('phase', models.PositiveIntegerField(default=1)),
                ('round_number', models.PositiveIntegerField(default=1)),
                ('team1_score', models.PositiveIntegerField(blank=True, null=True)),
                ('team2_score', models.PositiveIntegerField(blank=True, null=True)),
                ('winner_team', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('completed', 'Completed')], default='pending', max_length=32)),
                ('played_at', models.DateTimeField(blank=True, null=True)),
                ('tournament', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='matches', to='tournament.tournament')),
                ('team1_player1', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='team1_player1_matches', to='tournament.player')),
                ('team1_player2', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='team1_player2_matches', to='tournament.player')),
                ('team2_player1', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='team2_player1_matches', to='tournament.player')),
                ('team2_player2', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='team2_player2_matches', to='tournament.player')),
            ],
            options={
                'verbose_name_plural': 'matches',
                'ordering': ['phase', 'round_number', 'pk'],
            },
        ),
        migrations.CreateModel(
            name='PlayerStats',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date_created', models.DateTimeField(auto_now_add=True)),
                ('date_modified', models.DateTimeField(auto_now=True)),
                ('total_matches', _count_field()),
                ('matches_won', _count_field()),
                ('matches_lost', _count_field()),
                ('matches_drawn', _count_field()),
                ('sets_won', _count_field()),
                ('sets_lost', _count_field()),
                ('games_won', _count_field()),
                ('games_lost', _count_field()),
                ('tournaments_played', _count_field()),
                ('tournaments_won', _count_field()),
                ('player', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='stats', to='tournament.player')),
                ('tournament', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='player_stats', to='tournament.tournament')),
            ],
            options={
                'verbose_name_plural': 'player stats',
                'unique_together': {('player', 'tournament')},
            },
        ),
    ]
