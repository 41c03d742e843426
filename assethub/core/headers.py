APP_NAME = "assethub"


def entity_alert(action: str, entity_name: str, entity_id: str) -> dict[str, str]:
    """Headers telling clients what happened to an entity (created/updated/deleted)."""
    return {
        f"X-{APP_NAME.capitalize()}-Alert": f"{entity_name.capitalize()} {entity_id} {action}",
        f"X-{APP_NAME.capitalize()}-Params": entity_id,
    }


def pagination_headers(base_url: str, page: int, size: int, total: int) -> dict[str, str]:
    """``X-Total-Count`` plus page headers and an RFC 5988 ``Link`` header."""
    last_page = max((total + size - 1) // size - 1, 0)

    def _link(target: int, rel: str) -> str:
        return f'<{base_url}?page={target}&size={size}>; rel="{rel}"'

    links = []
    if page < last_page:
        links.append(_link(page + 1, "next"))
    if 0 < page <= last_page + 1:
        links.append(_link(page - 1, "prev"))
    links.append(_link(last_page, "last"))
    links.append(_link(0, "first"))

    return {
        "X-Total-Count": str(total),
        "X-Page-Number": str(page),
        "X-Page-Size": str(size),
        "Link": ",".join(links),
    }
