import django.db.models.deletion
import orders.models
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('created', models.DateTimeField(auto_now_add=True)),
                ('updated', models.DateTimeField(auto_now=True)),
                ('id', models.AutoField(primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('description', models.TextField()),
                ('price', models.PositiveIntegerField()),
                ('image_url', models.URLField(blank=True, default='', max_length=500)),
                ('in_stock', models.BooleanField(default=True)),
            ],
            options={
                'db_table': 'products',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created', models.DateTimeField(auto_now_add=True)),
                ('updated', models.DateTimeField(auto_now=True)),
                ('order_no', models.CharField(default=orders.models.generate_order_no, max_length=30, unique=True)),
                ('product_name', models.CharField(max_length=100)),
                ('quantity', models.PositiveIntegerField()),
                ('unit_price', models.PositiveIntegerField()),
                ('shipping_fee', models.PositiveIntegerField()),
                ('total_amount', models.PositiveIntegerField()),
                ('customer_name', models.CharField(max_length=40)),
                ('customer_email', models.EmailField(max_length=254)),
                ('customer_phone', models.CharField(max_length=20)),
                ('shipping_address', models.CharField(max_length=255)),
                ('customer_type', models.CharField(choices=[('guest', '비회원'), ('member', '회원')], default='guest', max_length=10)),
                ('order_type', models.CharField(choices=[('regular', '일반'), ('member', '회원가'), ('bulk', '대량 구매')], default='regular', max_length=10)),
                ('payment_status', models.CharField(choices=[('waiting', '결제 대기'), ('success', '결제 완료'), ('failed', '결제 실패')], default='waiting', max_length=10)),
                ('toss_payment_key', models.CharField(blank=True, default='', max_length=200)),
                ('paid_at', models.DateTimeField(blank=True, null=True)),
                ('shipping_status', models.CharField(choices=[('preparing', '배송 준비'), ('shipped', '발송 완료')], default='preparing', max_length=10)),
                ('tracking_no', models.CharField(blank=True, default='', max_length=50)),
                ('shipped_at', models.DateTimeField(blank=True, null=True)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='orders.product')),
            ],
            options={
                'db_table': 'orders',
                'ordering': ['-created'],
                'indexes': [
                    models.Index(fields=['payment_status'], name='orders_payment_status_idx'),
                    models.Index(fields=['shipping_status'], name='orders_shipping_status_idx'),
                ],
            },
        ),
    ]
