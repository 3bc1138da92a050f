import copy

from .fields import EntityReferenceField
from .widgets import PickerSelect


class PickerAdminMixin:
    """Give every EntityReferenceField on the admin form an autocomplete widget."""

    def get_form(self, request, obj=None, **kwargs):
        form = super().get_form(request, obj, **kwargs)
        for name, field in list(form.base_fields.items()):
            if not isinstance(field, EntityReferenceField):
                continue
            field = copy.deepcopy(field)
            field.widget = PickerSelect(
                field.picker,
                self.model._meta.get_field(name),
                self.admin_site,
                choices=field.choices,
            )
            field.widget.is_required = field.required
            form.base_fields[name] = field
        return form
