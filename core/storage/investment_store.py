"""
InvestmentStore - 투자 저장소
"""

from core.domain.entities import Investment
from core.storage.document_store import DocumentStore


class InvestmentStore(DocumentStore[Investment]):
    """투자 보유분 저장소"""

    TABLE = "investments"
    ENTITY = Investment

    DECIMAL_FIELDS = frozenset({"quantity", "purchase_price", "current_price"})
    DATE_FIELDS = frozenset({"purchase_date"})
