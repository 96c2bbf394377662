import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from orders.models import Product
from siteconfig.services import site_settings

User = get_user_model()

DEFAULT_PRODUCT = {
    'name': 'TAPMOVE 매트',
    'description': 'TAPMOVE 공식 매트입니다. 고품질 재료로 제작되었으며 다양한 운동에 활용할 수 있습니다.',
    'price': 19500,
    'in_stock': True,
}


class Command(BaseCommand):
    help = '기본 관리자 계정, 사이트 설정, 기본 상품을 생성합니다.'

    def handle(self, *args, **options):
        # 관리자 계정 정보는 환경 변수로 덮어쓸 수 있다
        admin_email = os.environ.get('ADMIN_LOGIN_EMAIL', 'admin@tapmove.com')
        admin_password = os.environ.get('ADMIN_LOGIN_PASSWORD', 'admin123!')

        if User.objects.filter(email=admin_email).exists():
            self.stdout.write(f'관리자 계정이 이미 존재합니다: {admin_email}')
        else:
            User.objects.create_superuser(
                email=admin_email,
                password=admin_password,
                name='TAPMOVE 관리자',
            )
            self.stdout.write(self.style.SUCCESS(f'관리자 계정 생성: {admin_email}'))

        site_settings.get(refresh=True)
        self.stdout.write(self.style.SUCCESS('사이트 설정 확인 완료.'))

        product, created = Product.objects.get_or_create(
            name=DEFAULT_PRODUCT['name'],
            defaults=DEFAULT_PRODUCT,
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f'기본 상품 생성: {product.name}'))
        else:
            self.stdout.write(f'기본 상품이 이미 존재합니다: {product.name}')
