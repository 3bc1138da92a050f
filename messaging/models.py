from django.conf import settings
from django.db import models

from classifieds_admin.models import SoftDeleteModel


class PrivateMessage(SoftDeleteModel):
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='sent_messages')
    receiver = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='received_messages')
    description = models.CharField(max_length=512)
    seen = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'private_messages'
        verbose_name = 'private message'
        verbose_name_plural = 'private messages'

    def __str__(self):
        return f'Message from {self.sender} to {self.receiver}'
