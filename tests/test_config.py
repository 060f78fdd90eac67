"""
Settings / logging / error formatting tests
"""
from analytics.age import AgeGroup, age_group_for_age
from analytics.performance import get_performance_category
from app.config import DEV_CORS_ORIGINS, PROD_CORS_ORIGINS, Settings
from app.errors import NotFoundError, format_validation_errors
from app.logging_setup import configure_logging


class TestSettings:
    """Environment driven settings"""

    def test_defaults(self):
        settings = Settings()
        assert settings.default_page_limit == 10
        assert settings.max_page_limit == 100

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MAX_PAGE_LIMIT", "50")
        monkeypatch.setenv("AGE_GROUP_INCLUSIVE_BOUNDS", "true")
        settings = Settings()

        assert settings.max_page_limit == 50
        assert age_group_for_age(9, settings.age_group_policy()) == AgeGroup.U09

    def test_cors_per_environment(self):
        assert Settings(environment="development").allowed_origins() == DEV_CORS_ORIGINS
        assert Settings(environment="production").allowed_origins() == PROD_CORS_ORIGINS
        assert Settings(cors_origins=["https://x.test"]).allowed_origins() == ["https://x.test"]

    def test_performance_ladder(self):
        settings = Settings(performance_excellent=40, performance_good=30, performance_average=20)
        thresholds = settings.performance_thresholds()
        assert get_performance_category(40, thresholds) == "excellent"
        assert get_performance_category(19, thresholds) == "below_average"


class TestLogging:
    """loguru sinks"""

    def test_file_sink(self, tmp_path):
        from loguru import logger

        log_dir = tmp_path / "logs"
        configure_logging(Settings(log_dir=str(log_dir), log_level="DEBUG"))
        logger.info("hello")
        logger.remove()

        files = list(log_dir.glob("speedball_*.log"))
        assert len(files) == 1
        assert "hello" in files[0].read_text()


class TestErrors:
    """Error shapes"""

    def test_not_found_message(self):
        assert NotFoundError("Player", "abc").message == "Player not found"

    def test_validation_error_format(self):
        errors = format_validation_errors([
            {"loc": ("body", "dateOfBirth"), "msg": "bad date", "type": "value_error"},
            {"loc": ("body",), "msg": "missing fields", "type": "value_error"},
            {"loc": ("query", "results", 0, "leftHandScore"), "msg": "too small", "type": "greater_than_equal"},
        ])
        assert errors == [
            {"field": "dateOfBirth", "message": "bad date", "type": "value_error"},
            {"field": "__root__", "message": "missing fields", "type": "value_error"},
            {"field": "results.0.leftHandScore", "message": "too small", "type": "greater_than_equal"},
        ]
