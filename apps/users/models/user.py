from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


class GiftCardUserManager(UserManager):
    """User manager exposing the lookups the gift card ledger needs"""

    def find_by_email(self, email):
        """
        Resolve an identity by contact address.
        Returns None when nobody is registered with that e-mail.
        """
        if not email:
            return None
        return self.filter(email__iexact=email.strip()).order_by('id').first()


class User(AbstractUser):
    """Custom User model; owners of gift cards and purchasing orders"""
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = GiftCardUserManager()

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def __str__(self):
        return self.username or self.email or f"User {self.id}"
