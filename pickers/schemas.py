from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiParameter, OpenApiResponse

from .serializers import PickerSearchResponseSerializer, PickerLabelSerializer

# ===================================================================
# Picker Schemas
# ===================================================================
entity_type_parameter = OpenApiParameter(
    name='entity_type',
    description='Collection to search, e.g. `users` or `posts`',
    required=True,
    type=str,
    location=OpenApiParameter.PATH,
)

picker_search_schema = extend_schema(
    tags=['Pickers'],
    summary="Search referenceable records",
    description="""Case-insensitive substring search over the collection's searchable attributes.

- An empty `term` returns the first records unfiltered.
- At most 50 options are returned, in storage order.
- The response uses the select2 format consumed by the admin autocomplete widget.""",
    parameters=[
        entity_type_parameter,
        OpenApiParameter(
            name='term',
            description='Text to look for (alias: `q`)',
            required=False,
            type=str,
            location=OpenApiParameter.QUERY,
        ),
    ],
    responses={
        200: PickerSearchResponseSerializer,
        404: OpenApiResponse(OpenApiTypes.OBJECT, description='Unknown entity type'),
        503: OpenApiResponse(OpenApiTypes.OBJECT, description='Store unavailable'),
    },
    examples=[
        OpenApiExample(
            'Users matching "an"',
            value={
                'results': [
                    {'id': 1, 'text': 'Ana - ana@x.com'},
                    {'id': 2, 'text': 'Ann - ann@x.com'},
                ],
                'pagination': {'more': False},
            },
            response_only=True,
        ),
    ],
)

picker_label_schema = extend_schema(
    tags=['Pickers'],
    summary="Resolve the label of a chosen record",
    description="Returns the same label the search endpoint shows for this key.",
    parameters=[
        entity_type_parameter,
        OpenApiParameter(
            name='key',
            description='Previously selected key',
            required=True,
            type=str,
            location=OpenApiParameter.PATH,
        ),
    ],
    responses={
        200: PickerLabelSerializer,
        404: OpenApiResponse(OpenApiTypes.OBJECT, description='Reference no longer valid'),
        503: OpenApiResponse(OpenApiTypes.OBJECT, description='Store unavailable'),
    },
)
