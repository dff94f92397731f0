"""
Category model: user-defined grouping of items.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class Category(models.Model):
    """Named group of items, ordered by sort_order per user."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='ledger_categories',
        verbose_name=_('User'),
    )
    name = models.CharField(max_length=100, verbose_name=_('Name'))
    sort_order = models.IntegerField(default=0, verbose_name=_('Sort order'))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Category')
        verbose_name_plural = _('Categories')
        ordering = ['sort_order', 'id']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'name'],
                name='unique_category_name_per_user',
            ),
        ]
        indexes = [
            models.Index(fields=['user', 'sort_order'], name='ledger_cat_user_sort_idx'),
        ]

    def __str__(self) -> str:
        return self.name
