from django import forms

from .core import get_picker


class EntityReferenceField(forms.ModelChoiceField):
    """Form field holding the key of an entity chosen through a picker.

    Submitted keys are checked against the picker's queryset, so a row that
    disappeared (or was hidden) after it was offered fails validation.
    """
    widget = forms.NumberInput
    default_error_messages = {
        'invalid_choice': 'The selected record no longer exists.',
    }

    def __init__(self, picker_class, **kwargs):
        self.picker = get_picker(picker_class.entity_type)
        super().__init__(queryset=self.picker.get_queryset(), **kwargs)

    def label_from_instance(self, obj):
        return self.picker.label_for(obj)
