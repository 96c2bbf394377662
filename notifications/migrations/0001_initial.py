from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='SmsLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created', models.DateTimeField(auto_now_add=True)),
                ('updated', models.DateTimeField(auto_now=True)),
                ('phone_number', models.CharField(max_length=20)),
                ('message', models.TextField()),
                ('status', models.CharField(choices=[('success', '성공'), ('failed', '실패')], max_length=10)),
                ('provider', models.CharField(default='coolsms', max_length=20)),
                ('error_message', models.CharField(blank=True, default='', max_length=255)),
                ('event_type', models.CharField(default='manual', max_length=40)),
                ('related_id', models.CharField(blank=True, default='', max_length=64)),
            ],
            options={
                'db_table': 'sms_logs',
                'ordering': ['-created'],
                'indexes': [models.Index(fields=['status'], name='sms_logs_status_idx')],
            },
        ),
    ]
