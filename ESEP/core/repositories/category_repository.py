"""
Category Repository
Handles database operations for categories table
"""

import json
from decimal import Decimal
from typing import Optional, List, Dict, Any

from core.repositories.base_repository import BaseRepository
from core.models.entities import Category

class CategoryRepository(BaseRepository):
    """Repository for categories table operations"""

    def __init__(self, db=None, feed=None):
        super().__init__('categories', 'id', auto_increment=False, db=db, feed=feed)

    def create_category(self, category: Category) -> str:
        data = self._category_to_dict(category)
        data['id'] = category.id
        return self.create(data)

    def update_category(self, category_id: str, category: Category) -> bool:
        return self.update(category_id, self._category_to_dict(category))

    def set_active(self, category_id: str, is_active: bool) -> bool:
        return self.update(category_id, {'is_active': is_active})

    def find_category_by_id(self, category_id: str) -> Optional[Category]:
        data = self.find_by_id(category_id)
        return self._dict_to_category(data) if data else None

    def get_all(self) -> List[Category]:
        """All categories ordered by name"""
        return [self._dict_to_category(row) for row in self.find_all(order_by='name')]

    def get_active(self) -> List[Category]:
        rows = self.find_by_field('is_active', True, order_by='name')
        return [self._dict_to_category(row) for row in rows]

    def _category_to_dict(self, category: Category) -> Dict[str, Any]:
        return {
            'name': category.name,
            'description': category.description,
            'actual_fee': category.actual_fee,
            'offer_fee': category.offer_fee,
            'image': category.image or '',
            'features': json.dumps(list(category.features or [])),
            'is_active': bool(category.is_active),
        }

    def _dict_to_category(self, data: dict) -> Category:
        """Convert dictionary to Category object; features is a JSON array column"""
        features = data.get('features') or []
        if isinstance(features, (str, bytes)):
            features = json.loads(features) if features else []

        return Category(
            id=data['id'],
            name=data['name'],
            description=data.get('description') or '',
            actual_fee=Decimal(str(data.get('actual_fee') or 0)),
            offer_fee=Decimal(str(data.get('offer_fee') or 0)),
            image=data.get('image') or None,
            features=list(features),
            is_active=bool(data.get('is_active', True))
        )
