import logging

from .models import SiteSettings

logger = logging.getLogger(__name__)


class SettingsService:
    """
    사이트 설정(싱글톤 행)을 핸들러에 주입하기 위한 서비스 객체.

    처음 요청될 때 한 번 읽어 보관하고, refresh=True 이거나 invalidate() 이후에는
    저장소에서 다시 읽는다. 행이 없으면 기본값으로 생성한다.

    보관한 값은 프로세스마다 따로 있으므로, 다른 워커의 변경이 바로 보여야 하는
    요청 처리와 알림 작업에서는 refresh=True로 읽는다.
    """

    def __init__(self, model=SiteSettings):
        self.model = model
        self._cached = None

    def get(self, refresh: bool = False) -> SiteSettings:
        if refresh or self._cached is None:
            self._cached = self._load()
        return self._cached

    def invalidate(self) -> None:
        self._cached = None

    def _load(self) -> SiteSettings:
        instance = self.model.objects.filter(pk=self.model.SINGLETON_PK).first()
        if instance is not None:
            return instance

        instance, created = self.model.objects.get_or_create(
            pk=self.model.SINGLETON_PK,
            defaults=self.model.default_values(),
        )
        if created:
            logger.info("Default site settings created")
        return instance


site_settings = SettingsService()
