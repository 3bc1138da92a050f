import logging

from rest_framework import status
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from .core import get_picker, NotFound, StoreUnavailable, UnknownEntityType
from .schemas import picker_search_schema, picker_label_schema
from .serializers import PickerSearchResponseSerializer, PickerLabelSerializer

logger = logging.getLogger(__name__)


class PickerAPIView(APIView):
    permission_classes = [IsAdminUser]

    def unknown_entity_response(self, entity_type):
        return Response(
            {"detail": f"Unknown entity type: {entity_type}"},
            status=status.HTTP_404_NOT_FOUND,
        )

    def store_unavailable_response(self):
        return Response(
            {"detail": "The record store is unavailable. Try again later."},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )


class PickerSearchView(PickerAPIView):
    @picker_search_schema
    def get(self, request, entity_type):
        try:
            picker = get_picker(entity_type)
        except UnknownEntityType:
            return self.unknown_entity_response(entity_type)

        # select2 sends `term`; `q` is accepted for hand-written clients.
        query = request.query_params.get('term', request.query_params.get('q', ''))
        try:
            options = picker.search(query)
        except StoreUnavailable:
            return self.store_unavailable_response()

        return Response(PickerSearchResponseSerializer.from_options(options).data)


class PickerLabelView(PickerAPIView):
    @picker_label_schema
    def get(self, request, entity_type, key):
        try:
            picker = get_picker(entity_type)
        except UnknownEntityType:
            return self.unknown_entity_response(entity_type)

        try:
            label = picker.resolve_label(key)
        except NotFound:
            logger.info('Stale %s reference requested: %s', entity_type, key)
            return Response(
                {"detail": "Reference no longer valid.", "id": key},
                status=status.HTTP_404_NOT_FOUND,
            )
        except StoreUnavailable:
            return self.store_unavailable_response()

        return Response(PickerLabelSerializer({'id': key, 'text': label}).data)
