from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='SiteSettings',
            fields=[
                ('created', models.DateTimeField(auto_now_add=True)),
                ('updated', models.DateTimeField(auto_now=True)),
                ('id', models.PositiveSmallIntegerField(editable=False, primary_key=True, serialize=False)),
                ('review_passcode', models.CharField(max_length=128)),
                ('bulk_purchase_passcode', models.CharField(max_length=128)),
                ('member_discount_code', models.CharField(max_length=128)),
                ('seminar_date', models.CharField(default='2025-11-08(토) 14:00~18:00', max_length=100)),
                ('seminar_location', models.CharField(default='대구시 북구 침산남로 172, 3층 운동하는코끼리', max_length=200)),
                ('seminar_contact', models.CharField(default='0507-1403-3006', max_length=40)),
                ('seminar_capacity', models.PositiveIntegerField(default=20)),
                ('seminar_deadline', models.CharField(default='2025-10-31', max_length=20)),
                ('seminar_price', models.PositiveIntegerField(default=300000)),
                ('product_regular_price', models.PositiveIntegerField(default=19500)),
                ('product_member_price', models.PositiveIntegerField(default=17500)),
                ('shipping_fee_per_unit', models.PositiveIntegerField(default=320)),
                ('sms_enabled', models.BooleanField(default=True)),
            ],
            options={
                'verbose_name': '사이트 설정',
                'verbose_name_plural': '사이트 설정',
                'db_table': 'site_settings',
            },
        ),
    ]
