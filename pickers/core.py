import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.db.models import CharField, Q
from django.db.models.functions import Cast

logger = logging.getLogger(__name__)

MAX_RESULTS = 50

# Annotation holding the primary key rendered as text, so it can be matched
# like any other searchable attribute.
KEY_TEXT = 'key_text'


class PickerError(Exception):
    pass


class NotFound(PickerError):
    def __init__(self, entity_type, key):
        self.entity_type = entity_type
        self.key = key
        super().__init__(f'{entity_type} #{key} not found')


class StoreUnavailable(PickerError):
    pass


class UnknownEntityType(PickerError, KeyError):
    def __init__(self, entity_type):
        self.entity_type = entity_type
        super().__init__(f'No picker registered for "{entity_type}"')

    def __str__(self):
        return self.args[0]


class _AttributeLookup:
    """Mapping view over a model instance for str.format_map()."""

    def __init__(self, obj):
        self.obj = obj

    def __getitem__(self, name):
        return getattr(self.obj, name)


class EntityPicker:
    """Search-and-resolve access to one collection of referenced entities.

    Subclasses declare which model to read, which attributes a search looks
    at and how a row is labeled. The same label template is used for search
    results and for redrawing an already chosen key.
    """
    entity_type = None
    model = None
    search_fields = ()
    label_template = '{pk}'
    select_related = ()

    def get_queryset(self):
        return self.model._default_manager.all()

    def _base_queryset(self):
        queryset = self.get_queryset()
        if self.select_related:
            queryset = queryset.select_related(*self.select_related)
        return queryset

    def label_for(self, obj):
        return self.label_template.format_map(_AttributeLookup(obj))

    def build_filter(self, query):
        condition = Q()
        for field in self.search_fields:
            condition |= Q(**{f'{field}__icontains': query})
        return condition

    def search(self, query=''):
        """Return an ordered {key: label} dict of at most MAX_RESULTS rows."""
        query = query or ''
        queryset = self._base_queryset()
        if query:
            if KEY_TEXT in self.search_fields:
                queryset = queryset.annotate(**{KEY_TEXT: Cast('pk', output_field=CharField())})
            queryset = queryset.filter(self.build_filter(query))

        try:
            rows = list(queryset.order_by('pk')[:MAX_RESULTS])
        except DatabaseError as exc:
            logger.exception('%s search failed (query=%r)', self.entity_type, query)
            raise StoreUnavailable(f'{self.entity_type} search failed') from exc

        logger.debug('%s search %r matched %d rows', self.entity_type, query, len(rows))
        return {row.pk: self.label_for(row) for row in rows}

    def resolve_label(self, key):
        try:
            obj = self._base_queryset().get(pk=key)
        except self.model.DoesNotExist:
            raise NotFound(self.entity_type, key) from None
        except (ValueError, TypeError, ValidationError):
            # Keys that can't be a primary key can't point at a row either.
            raise NotFound(self.entity_type, key) from None
        except DatabaseError as exc:
            logger.exception('%s label lookup failed (key=%r)', self.entity_type, key)
            raise StoreUnavailable(f'{self.entity_type} lookup failed') from exc
        return self.label_for(obj)


_registry = {}


def register(picker_class):
    """Class decorator adding a picker to the registry under its entity_type."""
    if not picker_class.entity_type:
        raise ValueError(f'{picker_class.__name__} must define entity_type')
    _registry[picker_class.entity_type] = picker_class()
    return picker_class


def get_picker(entity_type):
    try:
        return _registry[entity_type]
    except KeyError:
        raise UnknownEntityType(entity_type) from None


def registered_entity_types():
    return sorted(_registry)


def search(query, entity_type):
    return get_picker(entity_type).search(query)


def resolve_label(entity_type, key):
    return get_picker(entity_type).resolve_label(key)
