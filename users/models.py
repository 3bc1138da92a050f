from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.core.validators import MinLengthValidator
from django.db import models

from classifieds_admin.models import SoftDeleteQuerySet
from .validators import validate_address, validate_phone_number, validate_adult_birth_date


class UserManager(BaseUserManager.from_queryset(SoftDeleteQuerySet)):
    def create_user(self, email, name, password=None, **extra_fields):
        if not email:
            raise ValueError('The Email field must be set')
        email = self.normalize_email(email)

        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)

        user = self.model(email=email, name=name, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, name, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_verified', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, name, password, **extra_fields)


class User(AbstractUser):
    # Login is by email; one display name replaces username/first/last name
    username = None
    first_name = None
    last_name = None

    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=255, unique=True)
    description = models.CharField(max_length=255, blank=True, default='')
    address = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        validators=[MinLengthValidator(10), validate_address],
    )
    phone_number = models.CharField(
        max_length=16,
        null=True,
        blank=True,
        validators=[MinLengthValidator(3), validate_phone_number],
    )
    date_of_birth = models.DateField(null=True, blank=True, validators=[validate_adult_birth_date])
    avatar = models.URLField(max_length=500, null=True, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True, verbose_name='IP address')
    is_verified = models.BooleanField(default=False)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        db_table = 'users'
        verbose_name = 'user'
        verbose_name_plural = 'users'

    def __str__(self):
        return self.email

    def get_full_name(self):
        return self.name

    def get_short_name(self):
        return self.name

    @property
    def is_hidden(self):
        return self.deleted_at is not None

    @property
    def role_tags(self):
        return [
            'admin' if self.is_staff else 'user',
            'verified' if self.is_verified else 'not verified',
        ]
