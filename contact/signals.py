"""
Contact Signals
"""
import logging

from django.db.models.signals import post_save
from django.dispatch import receiver
from .models import Contact

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Contact)
def contact_post_save(sender, instance, created, **kwargs):
    """Log new contact submissions."""
    if created:
        logger.info(f"New contact submission {instance.id} from {instance.email}")
