from django.contrib.admin.widgets import AutocompleteSelect
from django.core.validators import EMPTY_VALUES
from django.urls import reverse

from .core import NotFound

STALE_REFERENCE_LABEL = '(no longer available: #{key})'


class PickerSelect(AutocompleteSelect):
    """Admin select2 widget backed by the picker search endpoint.

    Only the currently selected key is rendered as an <option>; its text comes
    from the picker's resolve_label() so it matches what a search would show.
    """

    def __init__(self, picker, field, admin_site, attrs=None, choices=(), using=None):
        self.picker = picker
        super().__init__(field, admin_site, attrs=attrs, choices=choices, using=using)

    def get_url(self):
        return reverse('picker-search', kwargs={'entity_type': self.picker.entity_type})

    def optgroups(self, name, value, attr=None):
        default = (None, [], 0)
        groups = [default]
        if not self.is_required and not self.allow_multiple_selected:
            default[1].append(self.create_option(name, '', '', False, 0))

        selected = [str(v) for v in value if v not in EMPTY_VALUES]
        for index, key in enumerate(selected, start=1):
            try:
                label = self.picker.resolve_label(key)
            except NotFound:
                label = STALE_REFERENCE_LABEL.format(key=key)
            default[1].append(self.create_option(name, key, label, True, index))
        return groups
