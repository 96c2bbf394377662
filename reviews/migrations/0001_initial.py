import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Review',
            fields=[
                ('created', models.DateTimeField(auto_now_add=True)),
                ('updated', models.DateTimeField(auto_now=True)),
                ('id', models.AutoField(primary_key=True, serialize=False)),
                ('review_body', models.TextField(max_length=2000)),
                ('author_name', models.CharField(default='익명', max_length=40)),
                ('rating', models.PositiveSmallIntegerField(default=5, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
                ('status', models.CharField(choices=[('pending', '검토 대기'), ('approved', '게시'), ('hidden_by_filter', '필터 숨김')], default='pending', max_length=20)),
                ('filter_flagged', models.BooleanField(default=False)),
                ('filter_reason', models.CharField(blank=True, default='', max_length=100)),
            ],
            options={
                'db_table': 'reviews',
                'ordering': ['-created'],
                'indexes': [models.Index(fields=['status'], name='reviews_status_idx')],
            },
        ),
    ]
