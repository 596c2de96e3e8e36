from pydantic import BaseModel


class Service(BaseModel):
    id: str
    name: str


SERVICE_CATALOG: tuple[Service, ...] = (
    Service(id="1", name="Web consulting"),
    Service(id="2", name="Digital strategy"),
    Service(id="3", name="UX/UI design"),
    Service(id="4", name="Digital marketing"),
    Service(id="5", name="Other service"),
)

UNSPECIFIED_SERVICE_NAME = "Not specified"


def get_service_name(service_id: str | None) -> str:
    """Display name for a catalog id; unknown ids resolve to a placeholder."""
    for service in SERVICE_CATALOG:
        if service.id == service_id:
            return service.name
    return UNSPECIFIED_SERVICE_NAME
