"""Filter and sort criteria for invoice lists"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Union
from pydantic import BaseModel, Field
from src.domain.invoice import PaymentStatus


class DateRange(BaseModel):
    """Inclusive date range; either bound may be omitted"""

    start_date: Optional[Union[datetime, date]] = Field(
        default=None,
        description="Earliest issue date kept (normalized to 00:00:00.000)"
    )

    end_date: Optional[Union[datetime, date]] = Field(
        default=None,
        description="Latest issue date kept (normalized to 23:59:59.999)"
    )


class FilterCriteria(BaseModel):
    """
    Optional predicates narrowing an invoice list

    An absent field imposes no constraint. An empty payment_statuses list
    also imposes no constraint.
    """

    date_range: Optional[DateRange] = None
    payment_statuses: Optional[List[PaymentStatus]] = None
    search_term: Optional[str] = None


class SortField(str, Enum):
    DATE = "date"
    INVOICE_NUMBER = "invoice_number"
    CUSTOMER_NAME = "customer_name"
    TOTAL = "total"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"
