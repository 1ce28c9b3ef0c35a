"""Body measurement store."""

from collections.abc import Mapping
from dataclasses import dataclass

from fitness_ledger.domain.models import BodyStat, StorageKey
from fitness_ledger.services.collections import CollectionStore
from fitness_ledger.services.images import ImageEncoder, encode_photo


@dataclass
class BodyStatStore(CollectionStore[BodyStat]):
    """Store for body measurements and progress photos."""

    key = StorageKey.BODY_STATS
    model = BodyStat

    image_encoder: ImageEncoder | None = None

    def add(
        self, data: Mapping[str, object], photo: bytes | None = None
    ) -> BodyStat:
        """Log measurements, encoding an optional progress photo."""
        if photo is not None:
            data = {**data, "photoPath": encode_photo(self.image_encoder, photo)}
        return super().add(data)

    def attach_photo(self, stat_id: str, photo: bytes) -> BodyStat | None:
        """Replace the progress photo of an existing entry."""
        if self.get(stat_id) is None:
            return None
        return self.update(
            stat_id, {"photoPath": encode_photo(self.image_encoder, photo)}
        )
