from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Application',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created', models.DateTimeField(auto_now_add=True)),
                ('updated', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=40)),
                ('birthdate', models.CharField(max_length=20)),
                ('email', models.EmailField(max_length=254)),
                ('phone', models.CharField(max_length=20)),
                ('address', models.CharField(max_length=255)),
                ('depositor_name', models.CharField(max_length=40)),
                ('uniform_size', models.CharField(blank=True, choices=[('S', 'S'), ('M', 'M'), ('L', 'L'), ('XL', 'XL'), ('XXL', 'XXL')], default='', max_length=4)),
                ('class_plan', models.CharField(blank=True, choices=[('plan', '진행 예정'), ('no', '하지 않음')], default='', max_length=4)),
                ('class_type_infant', models.BooleanField(default=False)),
                ('class_type_elementary', models.BooleanField(default=False)),
                ('class_type_middle_high', models.BooleanField(default=False)),
                ('class_type_adult', models.BooleanField(default=False)),
                ('class_type_senior', models.BooleanField(default=False)),
                ('class_type_rehab', models.BooleanField(default=False)),
                ('privacy_agreement', models.BooleanField(default=False)),
                ('admin_memo', models.TextField(blank=True, default='')),
                ('status', models.CharField(choices=[('waiting', '입금 대기'), ('payment_confirmed', '입금 확인'), ('confirmed', '참가 확정'), ('rejected', '반려')], default='waiting', max_length=20)),
            ],
            options={
                'db_table': 'applications',
                'ordering': ['-created'],
                'indexes': [
                    models.Index(fields=['status'], name='applications_status_idx'),
                    models.Index(fields=['email'], name='applications_email_idx'),
                ],
            },
        ),
    ]
