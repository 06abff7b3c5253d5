"""
core/constants.py 테스트
"""

from pathlib import Path

from core.constants import (
    BILL_CATEGORIES,
    DEFAULT_CATEGORIES,
    EXPENSE_BREAKDOWN_COLORS,
    EXPENSE_BREAKDOWN_LIMIT,
    PROJECT_ROOT,
    Pagination,
    Paths,
)


class TestPaths:
    """경로 상수 테스트"""

    def test_are_paths(self) -> None:
        assert isinstance(PROJECT_ROOT, Path)
        assert isinstance(Paths.SETTINGS_FILE, Path)

    def test_db_files_under_data_dir(self) -> None:
        assert Paths.PROD_DB.parent == Paths.DATA_DIR
        assert Paths.DEV_DB.parent == Paths.DATA_DIR
        assert Paths.PROD_DB != Paths.DEV_DB


class TestDefaultCategories:
    """기본 카테고리 세트"""

    def test_counts(self) -> None:
        """지출 10개, 수입 5개"""
        types = [c[1] for c in DEFAULT_CATEGORIES]

        assert types.count("expense") == 10
        assert types.count("income") == 5

    def test_unique_per_type(self) -> None:
        keys = [(name, type) for name, type, _, _ in DEFAULT_CATEGORIES]

        assert len(keys) == len(set(keys))


class TestLimits:
    def test_pagination(self) -> None:
        assert Pagination.DEFAULT_PAGE == 1
        assert Pagination.DEFAULT_LIMIT <= Pagination.MAX_LIMIT

    def test_breakdown_has_enough_colors(self) -> None:
        assert len(EXPENSE_BREAKDOWN_COLORS) >= EXPENSE_BREAKDOWN_LIMIT

    def test_bill_categories(self) -> None:
        assert "Loan Payment" in BILL_CATEGORIES
