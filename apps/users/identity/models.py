"""Users Identity - Domain Models."""
import uuid
import secrets
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models
from apps.common.core.storage import user_avatar_path
from apps.common.core.validators import phone_validator


class UserManager(BaseUserManager):
    """Custom user manager supporting email-based authentication."""

    def _create_user(self, email: str, password: str, **extra_fields):
        if not email:
            raise ValueError('Email is required')
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str = None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', User.Role.ADMIN)
        if not extra_fields.get('is_staff'):
            raise ValueError('Superuser must have is_staff=True')
        if not extra_fields.get('is_superuser'):
            raise ValueError('Superuser must have is_superuser=True')
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """Marketplace user: a client who requests work or a master who offers it."""

    class Role(models.TextChoices):
        CLIENT = 'client', 'Client'
        MASTER = 'master', 'Master'
        ADMIN = 'admin', 'Admin'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, verbose_name='Email', error_messages={'unique': 'This email is already in use'})
    username = models.CharField(max_length=150, unique=True, blank=True, verbose_name='Username')
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.CLIENT, db_index=True, verbose_name='Role')
    phone = models.CharField(max_length=15, blank=True, validators=[phone_validator], verbose_name='Phone Number')
    avatar = models.ImageField(upload_to=user_avatar_path, blank=True, null=True, verbose_name='Avatar')
    about = models.TextField(blank=True, verbose_name='About')
    occupations = models.ManyToManyField('tickets.Occupation', blank=True, related_name='masters', verbose_name='Occupations')
    addresses = models.ManyToManyField('geography.Address', blank=True, related_name='users', verbose_name='Addresses')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    class Meta:
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['-date_joined']
        indexes = [models.Index(fields=['email']), models.Index(fields=['role'])]

    def __str__(self) -> str:
        return self.email

    def save(self, *args, **kwargs):
        if not self.username:
            base_username = self.email.split('@')[0][:30]
            if not User.objects.filter(username=base_username).exists():
                self.username = base_username
            else:
                self.username = f"{base_username}_{secrets.token_hex(3)}"
        super().save(*args, **kwargs)

    @property
    def full_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.username

    @property
    def is_client(self) -> bool:
        return self.role == self.Role.CLIENT

    @property
    def is_master(self) -> bool:
        return self.role == self.Role.MASTER

    @property
    def is_member(self) -> bool:
        return self.role in (self.Role.CLIENT, self.Role.MASTER)

    @property
    def is_admin(self) -> bool:
        return self.role == self.Role.ADMIN or self.is_staff
