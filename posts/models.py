from django.conf import settings
from django.core.validators import MinLengthValidator
from django.db import models

from classifieds_admin.models import SoftDeleteModel


class Post(SoftDeleteModel):
    class PostType(models.TextChoices):
        REQUEST = 'REQUEST', 'Request'
        FOUND = 'FOUND', 'Found'

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='posts')
    title = models.CharField(max_length=128, validators=[MinLengthValidator(3)])
    description = models.CharField(max_length=256, validators=[MinLengthValidator(3)])
    lat = models.DecimalField(max_digits=9, decimal_places=6, verbose_name='latitude')
    lng = models.DecimalField(max_digits=9, decimal_places=6, verbose_name='longitude')
    post_type = models.CharField(max_length=16, choices=PostType.choices, blank=True, default='', verbose_name='type')
    reward = models.DecimalField(max_digits=10, decimal_places=2, help_text='Amount in RON')
    tags = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'posts'
        verbose_name = 'post'
        verbose_name_plural = 'posts'

    def __str__(self):
        return self.title


class Comment(SoftDeleteModel):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='comments')
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name='comments')
    description = models.CharField(max_length=256, validators=[MinLengthValidator(3)])

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'comments'
        verbose_name = 'comment'
        verbose_name_plural = 'comments'

    def __str__(self):
        return f'Comment by {self.user} on {self.post}'
