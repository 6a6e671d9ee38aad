# /app/services/database_service.py

from typing import Dict, Generator, List, Optional, Tuple

from fastapi import Depends
from sqlalchemy.orm import Session

# --- Core Database Setup ---
from app.db.database import get_db
from app.db.models.artwork_models import Artwork, ArtworkGroup

# --- Repository Imports ---
from .database_helpers.artwork_repository_sql import ArtworkRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session):
        """
        Facade over the SQL repositories. Services and routers depend on this
        class, never on a repository or a raw session.
        """
        self.artwork_repo = ArtworkRepositorySQL(db_session)

    def release(self) -> None: self.artwork_repo.release()

    # --- GROUP METHODS (DELEGATED) ---
    def create_group(self, group_record: Dict) -> ArtworkGroup: return self.artwork_repo.create_group(group_record)
    def get_group(self, group_id: int) -> ArtworkGroup: return self.artwork_repo.get_group(group_id)
    def list_groups(self, category: Optional[str] = None) -> List[ArtworkGroup]: return self.artwork_repo.list_groups(category)
    def update_group(self, group_id: int, group_data: Dict) -> ArtworkGroup: return self.artwork_repo.update_group(group_id, group_data)
    def delete_group(self, group_id: int) -> None: self.artwork_repo.delete_group(group_id)
    def get_distinct_categories(self) -> List[str]: return self.artwork_repo.get_distinct_categories()

    # --- ARTWORK METHODS (DELEGATED) ---
    def create_artwork(self, artwork_record: Dict) -> Artwork: return self.artwork_repo.create_artwork(artwork_record)
    def get_artwork(self, artwork_id: int) -> Artwork: return self.artwork_repo.get_artwork(artwork_id)
    def list_artworks_by_group(self, group_id: int) -> List[Artwork]: return self.artwork_repo.list_artworks_by_group(group_id)
    def count_artworks_in_group(self, group_id: int) -> int: return self.artwork_repo.count_artworks_in_group(group_id)
    def update_artwork_params(self, artwork_id: int, temperature: float, max_tokens: int) -> Artwork:
        return self.artwork_repo.update_artwork_params(artwork_id, temperature, max_tokens)
    def save_artwork_svg(self, artwork_id: int, svg: str) -> Artwork: return self.artwork_repo.save_artwork_svg(artwork_id, svg)
    def delete_artwork(self, artwork_id: int) -> None: self.artwork_repo.delete_artwork(artwork_id)

    # --- GALLERY METHODS (DELEGATED) ---
    def list_groups_with_artworks(self, category: Optional[str] = None) -> Tuple[List[ArtworkGroup], Dict[int, List[Artwork]]]:
        return self.artwork_repo.list_groups_with_artworks(category)
    def get_random_group_with_model_artworks(self, model_a: str, model_b: str) -> Tuple[ArtworkGroup, List[Artwork]]:
        return self.artwork_repo.get_random_group_with_model_artworks(model_a, model_b)


# --- DEPENDENCY PROVIDER ---
def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """
    FastAPI dependency that provides a DatabaseService bound to the
    request's session.
    """
    yield DatabaseService(db_session=db)
