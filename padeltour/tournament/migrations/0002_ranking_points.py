import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


CATEGORY_CHOICES = [
    ('OPEN_250', 'Open 250'),
    ('OPEN_500', 'Open 500'),
    ('OPEN_1000', 'Open 1000'),
    ('MASTERS', 'Masters'),
]


class Migration(migrations.Migration):

    dependencies = [
        ('tournament', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='tournament',
            name='category',
            field=models.CharField(choices=CATEGORY_CHOICES, default='OPEN_250', max_length=32),
        ),
        migrations.CreateModel(
            name='TournamentResult',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date_created', models.DateTimeField(auto_now_add=True)),
                ('date_modified', models.DateTimeField(auto_now=True)),
                ('final_position', models.PositiveIntegerField()),
                ('points_awarded', models.FloatField(default=0)),
                ('bonus_points', models.FloatField(default=0)),
                ('category', models.CharField(choices=CATEGORY_CHOICES, max_length=32)),
                ('player', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tournament_results', to='tournament.player')),
                ('tournament', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='results', to='tournament.tournament')),
            ],
            options={
                'ordering': ['tournament', 'final_position', 'player'],
                'unique_together': {('tournament', 'player')},
            },
        ),
        migrations.CreateModel(
            name='TournamentPointConfig',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date_created', models.DateTimeField(auto_now_add=True)),
                ('date_modified', models.DateTimeField(auto_now=True)),
                ('category', models.CharField(choices=CATEGORY_CHOICES, max_length=32)),
                ('position', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('points', models.FloatField(validators=[django.core.validators.MinValueValidator(0)])),
            ],
            options={
                'ordering': ['category', 'position'],
                'unique_together': {('category', 'position')},
            },
        ),
    ]
