"""
Category Service - Self-employment categories, their fees, images and features.
"""
import logging
from dataclasses import replace
from decimal import Decimal
from typing import List, Dict, Any, Optional

from core.models.entities import Category
from core.models.roles import Action
from core.repositories.category_repository import CategoryRepository
from utils.exceptions import (
    ValidationException, NotFoundException, DuplicateRecordException, DatabaseException
)
from utils.validators import PortalValidator
from utils.helpers import LoggingUtils, StringUtils

logger = logging.getLogger(__name__)

# ─── Built-in catalogue, shown when the categories table is empty ────────────
DEFAULT_CATEGORIES = [
    Category(
        id='pennyekart-free', name='Pennyekart Free Registration',
        description='Totally free registration with basic level access. Free delivery between 2pm to 6pm.',
        actual_fee=Decimal('0'), offer_fee=Decimal('0'),
        features=['Free registration', 'Free delivery (2pm-6pm)', 'Basic level access',
                  'E-commerce platform access'],
    ),
    Category(
        id='pennyekart-paid', name='Pennyekart Paid Registration',
        description='Premium registration with extended delivery hours and enhanced features.',
        actual_fee=Decimal('500'), offer_fee=Decimal('299'),
        features=['Any time delivery (8am-7pm)', 'Premium features', 'Priority support',
                  'Extended service hours'],
    ),
    Category(
        id='farmelife', name='Farmelife',
        description='Connected with dairy farm, poultry farm and agricultural businesses.',
        actual_fee=Decimal('800'), offer_fee=Decimal('599'),
        features=['Dairy farm connections', 'Poultry farm network', 'Agricultural business support',
                  'Farm-to-market solutions'],
    ),
    Category(
        id='organelife', name='Organelife',
        description='Connected with vegetable and house gardening, especially terrace vegetable farming.',
        actual_fee=Decimal('600'), offer_fee=Decimal('399'),
        features=['Organic farming support', 'Terrace gardening solutions', 'Vegetable farming network',
                  'Sustainable agriculture'],
    ),
    Category(
        id='foodelif', name='Foodelif',
        description='Connected with food processing business and culinary services.',
        actual_fee=Decimal('700'), offer_fee=Decimal('499'),
        features=['Food processing business', 'Culinary services', 'Recipe sharing platform',
                  'Food quality certification'],
    ),
    Category(
        id='entrelife', name='Entrelife',
        description='Connected with skilled projects like stitching, art works, and various home services.',
        actual_fee=Decimal('650'), offer_fee=Decimal('449'),
        features=['Skilled project management', 'Stitching and tailoring', 'Art and craft services',
                  'Home service network'],
    ),
    Category(
        id='job-card', name='Job Card',
        description='Special offer card with access to all categories, special discounts, and investment opportunities.',
        actual_fee=Decimal('2000'), offer_fee=Decimal('999'),
        features=['Access to all categories', 'Special fee cut packages', 'Exclusive offers and discounts',
                  'Investment card benefits', 'Convertible to any category', 'Points and profit system'],
    ),
]

EDITABLE_FIELDS = ('name', 'description', 'actual_fee', 'offer_fee', 'image', 'features', 'is_active')


class CategoryService:
    def __init__(self, category_repo: CategoryRepository = None):
        self.category_repo = category_repo or CategoryRepository()

    @staticmethod
    def parse_features(text: str) -> List[str]:
        """One feature per line; blank lines are dropped."""
        return [line.strip() for line in (text or '').splitlines() if line.strip()]

    def list_categories(self) -> List[Category]:
        return self.category_repo.get_all()

    def list_public_categories(self) -> List[Category]:
        """Active categories for the public pages, falling back to the built-in catalogue"""
        try:
            categories = self.category_repo.get_active()
        except DatabaseException as e:
            logger.warning(f"Using default categories: {e}")
            return list(DEFAULT_CATEGORIES)
        return categories or list(DEFAULT_CATEGORIES)

    def get_category(self, category_id: str) -> Category:
        category = self.category_repo.find_category_by_id(category_id)
        if not category:
            raise NotFoundException(f"Category {category_id} not found")
        return category

    def create_category(self, session, name: str, description: str, actual_fee=0, offer_fee=0,
                        image: Optional[str] = None, features: List[str] = None,
                        is_active: bool = True) -> Category:
        session.require(Action.CREATE)
        fields = PortalValidator.validate_required_fields(
            {'name': name, 'description': description},
            {'name': 'Category Name', 'description': 'Description'}
        )
        PortalValidator.validate_image_url(image)

        category = Category(
            id=StringUtils.slugify_category(fields['name']),
            name=fields['name'],
            description=fields['description'],
            actual_fee=PortalValidator.validate_fee(actual_fee, "Actual fee"),
            offer_fee=PortalValidator.validate_fee(offer_fee, "Offer fee"),
            image=image.strip() if image else None,
            features=[f.strip() for f in (features or []) if f and f.strip()],
            is_active=bool(is_active),
        )

        if self.category_repo.exists(category.id):
            raise DuplicateRecordException(f"A category with id '{category.id}' already exists")

        self.category_repo.create_category(category)
        LoggingUtils.log_business_event("category_created", "category", category.id,
                                        username=session.username)
        return category

    def update_category(self, session, category_id: str, changes: Dict[str, Any]) -> Category:
        session.require(Action.UPDATE)
        current = self.get_category(category_id)

        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationException(f"Unknown category fields: {', '.join(sorted(unknown))}")

        clean = dict(changes)
        if 'name' in clean:
            clean['name'] = PortalValidator.validate_required(clean['name'], 'Category Name')
        if 'description' in clean:
            clean['description'] = PortalValidator.validate_required(clean['description'], 'Description')
        if 'actual_fee' in clean:
            clean['actual_fee'] = PortalValidator.validate_fee(clean['actual_fee'], "Actual fee")
        if 'offer_fee' in clean:
            clean['offer_fee'] = PortalValidator.validate_fee(clean['offer_fee'], "Offer fee")
        if 'image' in clean:
            PortalValidator.validate_image_url(clean['image'])
            clean['image'] = clean['image'].strip() if clean['image'] else None
        if 'features' in clean:
            clean['features'] = [f.strip() for f in (clean['features'] or []) if f and f.strip()]

        updated = replace(current, **clean)
        self.category_repo.update_category(category_id, updated)
        LoggingUtils.log_business_event("category_updated", "category", category_id,
                                        username=session.username, details={'fields': sorted(clean)})
        return updated

    def toggle_active(self, session, category_id: str) -> bool:
        """Flip is_active; returns the new value"""
        session.require(Action.SET_STATUS)
        category = self.get_category(category_id)
        new_value = not category.is_active
        self.category_repo.set_active(category_id, new_value)
        LoggingUtils.log_business_event("category_status_changed", "category", category_id,
                                        username=session.username, details={'is_active': new_value})
        return new_value

    def delete_category(self, session, category_id: str):
        session.require(Action.DELETE)
        self.get_category(category_id)
        self.category_repo.delete(category_id)
        LoggingUtils.log_business_event("category_deleted", "category", category_id,
                                        username=session.username)

    def row_actions(self, session, category: Category) -> frozenset:
        return frozenset(a for a in (Action.UPDATE, Action.DELETE, Action.SET_STATUS) if session.can(a))

    def subscribe(self, callback):
        return self.category_repo.subscribe(callback)
