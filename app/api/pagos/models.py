# app/api/pagos/models.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ...models.pago import PagoRead


# --- Modelos Pydantic (respuestas de Pagos) ---
class Pagination(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int


class PagoListResponse(BaseModel):
    pagos: list[PagoRead]
    pagination: Pagination
