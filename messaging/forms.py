from django import forms

from pickers.fields import EntityReferenceField
from users.pickers import UserPicker
from .models import PrivateMessage


class PrivateMessageAdminForm(forms.ModelForm):
    sender = EntityReferenceField(UserPicker, label='Associate sender')
    receiver = EntityReferenceField(UserPicker, label='Associate receiver')

    class Meta:
        model = PrivateMessage
        fields = ['sender', 'receiver', 'description', 'seen']
        widgets = {
            'description': forms.Textarea(attrs={'rows': 4}),
        }

    def clean(self):
        """Sender and receiver must be two different users."""
        cleaned_data = super().clean()
        sender = cleaned_data.get('sender')
        receiver = cleaned_data.get('receiver')

        if sender is not None and receiver is not None and sender.pk == receiver.pk:
            self.add_error('receiver', forms.ValidationError(
                'The receiver must be different from the sender.',
                code='different',
            ))

        return cleaned_data
