# /tests/test_services.py

import asyncio

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from app.core.config import Settings
from app.core.errors import GenerationError, NotFoundError, ValidationError
from app.db import base
from app.models.artwork_model import ArtworkCreate, ArtworkParamsUpdate
from app.models.generation_model import GenerateRequest
from app.models.group_model import GroupCreate, GroupUpdate
from app.services import artwork_service, gallery_service, generation_service, group_service
from app.services.database_service import DatabaseService


def _new_group(db_service, **fields):
    data = {"title": "Pelican", "prompt": "A pelican riding a bicycle", "category": "Animals"}
    data.update(fields)
    return group_service.create_group(GroupCreate(**data), db_service)


def _new_artwork(db_service, settings, group_id, model="openai/gpt-5", **params):
    return artwork_service.create_artwork(ArtworkCreate(group_id=group_id, model=model, **params), db_service, settings)


# --- Groups ---

def test_create_group_trims_title_and_prompt(db_service):
    group = _new_group(db_service, title="  Pelican  ", prompt="\n A pelican \n")
    assert group.title == "Pelican"
    assert group.prompt == "A pelican"


@pytest.mark.parametrize("field", ["title", "prompt"])
def test_create_group_rejects_blank_required_fields(db_service, field):
    with pytest.raises(ValidationError) as exc_info:
        _new_group(db_service, **{field: "   "})
    assert exc_info.value.details == {"field": field}
    assert db_service.list_groups() == []


def test_update_group_validates_before_writing(db_service):
    group = _new_group(db_service)
    with pytest.raises(ValidationError):
        group_service.update_group(group.id, GroupUpdate(title="", prompt="New"), db_service)
    assert db_service.get_group(group.id).title == "Pelican"


def test_group_detail_lists_artworks(db_service, settings):
    group = _new_group(db_service)
    _new_artwork(db_service, settings, group.id, model="openai/gpt-5")
    _new_artwork(db_service, settings, group.id, model="anthropic/claude-sonnet-4")

    detail = group_service.get_group_detail(group.id, db_service)

    assert detail.id == group.id
    assert [a.model for a in detail.artworks] == ["anthropic/claude-sonnet-4", "openai/gpt-5"]


# --- Artworks ---

def test_create_artwork_applies_defaults(db_service, settings):
    group = _new_group(db_service)
    artwork = _new_artwork(db_service, settings, group.id)
    assert artwork.temperature == settings.default_temperature
    assert artwork.max_tokens == settings.default_max_tokens
    assert artwork.svg == ""


def test_create_artwork_with_inline_group_creates_the_group(db_service, settings):
    payload = ArtworkCreate(
        group=GroupCreate(title="Starry Night", prompt="Van Gogh's Starry Night", category="Art"),
        model="google/gemini-2.5-pro",
        temperature=1.0,
        max_tokens=8000,
    )

    artwork = artwork_service.create_artwork(payload, db_service, settings)

    group = db_service.get_group(artwork.group_id)
    assert group.title == "Starry Night"
    assert db_service.count_artworks_in_group(group.id) == 1


def test_create_artwork_needs_a_group(db_service, settings):
    with pytest.raises(ValidationError):
        artwork_service.create_artwork(ArtworkCreate(model="openai/gpt-5"), db_service, settings)


def test_create_artwork_for_missing_group_is_not_found(db_service, settings):
    with pytest.raises(NotFoundError):
        artwork_service.create_artwork(ArtworkCreate(group_id=42, model="openai/gpt-5"), db_service, settings)


def test_invalid_params_do_not_leave_an_inline_group_behind(db_service, settings):
    payload = ArtworkCreate(
        group=GroupCreate(title="Heron", prompt="A heron"),
        model="openai/gpt-5",
        temperature=3.5,
    )
    with pytest.raises(ValidationError):
        artwork_service.create_artwork(payload, db_service, settings)
    assert db_service.list_groups() == []


@pytest.mark.parametrize("temperature,max_tokens", [(-0.1, 100), (2.01, 100), (0.5, 0), (0.5, -10)])
def test_params_out_of_range_are_rejected(temperature, max_tokens):
    with pytest.raises(ValidationError):
        artwork_service.validated_params(temperature, max_tokens, Settings())


def test_params_on_the_boundaries_are_accepted():
    assert artwork_service.validated_params(0.0, 1, Settings()) == (0.0, 1)
    assert artwork_service.validated_params(2.0, 1, Settings()) == (2.0, 1)


def test_update_params_keeps_svg(db_service, settings):
    group = _new_group(db_service)
    artwork = _new_artwork(db_service, settings, group.id)
    db_service.save_artwork_svg(artwork.id, "<svg/>")

    updated = artwork_service.update_artwork_params(
        artwork.id, ArtworkParamsUpdate(temperature=0.2, max_tokens=2048), db_service, settings
    )

    assert (updated.temperature, updated.max_tokens, updated.svg) == (0.2, 2048, "<svg/>")


def test_delete_artwork_reports_when_group_becomes_empty(db_service, settings):
    group = _new_group(db_service)
    first = _new_artwork(db_service, settings, group.id, model="openai/gpt-5")
    second = _new_artwork(db_service, settings, group.id, model="anthropic/claude-sonnet-4")

    result = artwork_service.delete_artwork(first.id, db_service)
    assert result.success is True
    assert result.group_id == group.id
    assert result.group_empty is False

    result = artwork_service.delete_artwork(second.id, db_service)
    assert result.group_empty is True
    assert db_service.get_group(group.id).id == group.id


# --- Generation ---

def test_generation_uses_group_prompt_and_artwork_params(db_service, settings, fake_client):
    group = _new_group(db_service, prompt="A lighthouse in a storm")
    artwork = _new_artwork(db_service, settings, group.id, model="anthropic/claude-sonnet-4", temperature=1.3, max_tokens=9000)

    result = asyncio.run(generation_service.generate_for_artwork(artwork.id, db_service, fake_client, settings))

    assert result.svg == fake_client.svg
    assert db_service.get_artwork(artwork.id).svg == fake_client.svg
    call = fake_client.calls[0]
    assert call["prompt"] == "A lighthouse in a storm"
    assert call["model"] == "anthropic/claude-sonnet-4"
    assert (call["temperature"], call["max_tokens"]) == (1.3, 9000)
    assert call["reasoning"] is None


def test_failed_regeneration_preserves_previous_svg(db_service, settings, failing_client):
    group = _new_group(db_service)
    artwork = _new_artwork(db_service, settings, group.id)
    db_service.save_artwork_svg(artwork.id, "<svg>keep me</svg>")

    with pytest.raises(GenerationError):
        asyncio.run(generation_service.generate_for_artwork(artwork.id, db_service, failing_client, settings))

    assert db_service.get_artwork(artwork.id).svg == "<svg>keep me</svg>"


def test_generation_leaves_the_pool_free_during_the_api_call(tmp_path, settings):
    # A single-connection pool: anything still holding it blocks every other request.
    engine = create_engine(
        f"sqlite:///{tmp_path / 'gallery.db'}",
        connect_args={"check_same_thread": False},
        pool_size=1,
        max_overflow=0,
        pool_timeout=1,
    )
    base.Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    db = DatabaseService(db_session=session)
    group = _new_group(db)
    artwork = _new_artwork(db, settings, group.id)
    observed = {}

    class ObservingClient:
        async def generate_svg(self, prompt_text, model, temperature, max_tokens, reasoning=None):
            observed["in_transaction"] = session.in_transaction()
            observed["checked_out"] = engine.pool.checkedout()
            with engine.connect() as other_request:
                observed["other_request"] = other_request.execute(text("select 1")).scalar()
            return "<svg/>"

    try:
        result = asyncio.run(generation_service.generate_for_artwork(artwork.id, db, ObservingClient(), settings))
        assert observed == {"in_transaction": False, "checked_out": 0, "other_request": 1}
        assert result.svg == "<svg/>"
        assert db.get_artwork(artwork.id).svg == "<svg/>"
    finally:
        session.close()
        engine.dispose()


def test_generation_for_missing_artwork_is_not_found(db_service, settings, fake_client):
    with pytest.raises(NotFoundError):
        asyncio.run(generation_service.generate_for_artwork(7, db_service, fake_client, settings))
    assert fake_client.calls == []


def test_reasoning_default_follows_settings(db_service, fake_client):
    settings = Settings(openrouter_api_key="k", reasoning_enabled=True, reasoning_effort="high")
    request = GenerateRequest(prompt="A fox", model="openai/gpt-5")

    asyncio.run(generation_service.generate_preview(request, fake_client, settings))

    reasoning = fake_client.calls[0]["reasoning"]
    assert reasoning.enabled is True
    assert reasoning.effort == "high"


def test_preview_requires_prompt_and_model(settings, fake_client):
    with pytest.raises(ValidationError):
        asyncio.run(generation_service.generate_preview(GenerateRequest(prompt="A fox", model=" "), fake_client, settings))
    with pytest.raises(ValidationError):
        asyncio.run(generation_service.generate_preview(GenerateRequest(prompt="", model="openai/gpt-5"), fake_client, settings))
    assert fake_client.calls == []


# --- Gallery pages ---

def test_gallery_only_shows_showcase_models(db_service, settings):
    group = _new_group(db_service, category="Art")
    _new_artwork(db_service, settings, group.id, model="OpenAI/GPT-5")
    _new_artwork(db_service, settings, group.id, model="openai/gpt-5-mini")
    _new_artwork(db_service, settings, group.id, model="google/gemini-2.5-pro")

    page = gallery_service.get_gallery_page(db_service, settings, category="Art")

    assert page.categories == ["Art"]
    assert [a.model for a in page.groups[0].artworks] == ["OpenAI/GPT-5", "google/gemini-2.5-pro"]


def test_group_page_filters_by_provider_and_other(db_service, settings):
    group = _new_group(db_service)
    for model in ("openai/gpt-5", "anthropic/claude-sonnet-4", "meta-llama/llama-3.1-70b"):
        _new_artwork(db_service, settings, group.id, model=model)

    only_openai = gallery_service.get_group_page(group.id, db_service, settings, ["openai"])
    other = gallery_service.get_group_page(group.id, db_service, settings, ["other"])
    unfiltered = gallery_service.get_group_page(group.id, db_service, settings, [])

    assert [a.model for a in only_openai.artworks] == ["openai/gpt-5"]
    assert [a.model for a in other.artworks] == ["meta-llama/llama-3.1-70b"]
    assert len(unfiltered.artworks) == 3


def test_home_page_falls_back_to_provider_pair(db_service, settings):
    group = _new_group(db_service)
    _new_artwork(db_service, settings, group.id, model="anthropic/claude-3.5-sonnet")
    _new_artwork(db_service, settings, group.id, model="openai/gpt-4o")

    page = gallery_service.get_home_page(db_service, settings)

    assert page.featured_group.id == group.id
    assert [a.model for a in page.featured_artworks] == ["anthropic/claude-3.5-sonnet", "openai/gpt-4o"]


def test_home_page_without_candidates_has_no_feature(db_service, settings):
    assert gallery_service.get_home_page(db_service, settings).featured_group is None


def test_workshop_with_unknown_edit_id_is_empty(db_service, settings):
    page = gallery_service.get_workshop_page(db_service, settings, models=[], edit_group_id=404)
    assert page.edit_group is None
    assert page.edit_artworks == []
    assert page.default_max_tokens == settings.default_max_tokens


def test_sunflowers_lifecycle(db_service, settings, fake_client):
    group = _new_group(db_service, title="Sunflowers", prompt="Sunflowers by Vincent van Gogh.", category="Art")
    artwork = _new_artwork(db_service, settings, group.id, model="model-x", temperature=0.7, max_tokens=50000)
    assert artwork.svg == ""

    asyncio.run(generation_service.generate_for_artwork(artwork.id, db_service, fake_client, settings))
    assert db_service.get_artwork(artwork.id).svg

    group_service.delete_group(group.id, db_service)
    with pytest.raises(NotFoundError):
        artwork_service.get_artwork(artwork.id, db_service)


def test_pages_map_models_to_display_names(db_service, settings):
    group = _new_group(db_service, category="Art")
    _new_artwork(db_service, settings, group.id, model="openai/gpt-5")
    _new_artwork(db_service, settings, group.id, model="anthropic/claude-sonnet-4")
    names = {"openai/gpt-5": "OpenAI: GPT-5"}

    def display_name(model_id):
        return names.get(model_id, model_id)

    group_page = gallery_service.get_group_page(group.id, db_service, settings, [], display_name=display_name)
    gallery_page = gallery_service.get_gallery_page(db_service, settings, category="Art", display_name=display_name)

    expected = {"openai/gpt-5": "OpenAI: GPT-5", "anthropic/claude-sonnet-4": "anthropic/claude-sonnet-4"}
    assert group_page.model_names == expected
    assert gallery_page.model_names == expected
