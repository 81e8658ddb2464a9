from django.http import JsonResponse
from django.views.decorators.http import require_GET

from .services.catalog import filter_maps, find_map
from .services.presentation import timeline_payload
from .services.selection import Selection, resolve_selection
from .services.sources import fetch_catalog, fetch_rows


@require_GET
def wr_maps(request):
    """
    GET /api/maps?q=TERM
    Catalog metadata and the maps whose name contains TERM.
    """
    query = request.GET.get("q", "").strip()
    catalog = fetch_catalog()
    if catalog is None:
        return JsonResponse({"status": "empty", "generatedAt": None, "count": 0, "maps": []})

    maps = filter_maps(catalog, query)
    return JsonResponse({
        "status": "ok" if maps else "empty",
        "generatedAt": catalog.get("generatedAt"),
        "count": catalog.get("count", len(catalog.get("maps") or [])),
        "query": query,
        "maps": maps,
    })


@require_GET
def wr_timeline(request):
    """
    GET /api/timeline?map=NAME&class=Solly|Demo&view=map|zones&zone=ID
    Reconstructed WR timeline for one selection. Missing data is an empty payload.
    """
    requested = Selection(
        map=request.GET.get("map", "").strip() or None,
        klass=request.GET.get("class", "").strip(),
        view=request.GET.get("view", "").strip(),
        zone=request.GET.get("zone", "").strip() or None,
    )
    catalog = fetch_catalog()
    selection = resolve_selection(catalog, requested)
    rows = fetch_rows(find_map(catalog, selection.map), selection.klass)
    return JsonResponse(timeline_payload(catalog, requested, rows))
