"""
Unit tests for the session domain models.

Tests for:
- Enum validation and legacy unit spellings
- Work item discriminated union
- Copy helpers (duplicate, add_set, remove_set)
- Session helpers (new, counts, default title)
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from domain.models import (
    Block,
    BlockRole,
    BlockType,
    ExerciseConfig,
    ExerciseItem,
    ExerciseSet,
    IntensityType,
    Module,
    ProtocolType,
    RestItem,
    Session,
    VolumeType,
    WorkItem,
)


# =============================================================================
# Enums
# =============================================================================


@pytest.mark.unit
class TestExerciseConfigUnits:
    """Tests for volume/intensity unit validation."""

    def test_defaults_are_reps_and_rir(self):
        config = ExerciseConfig()
        assert config.volume_type == VolumeType.REPS
        assert config.intensity_type == IntensityType.RIR
        assert config.sets == []

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("%", IntensityType.PERCENT),
            ("kg", IntensityType.PESO),
            ("rpe", IntensityType.RPE),
            ("Watts", IntensityType.WATTS),
        ],
    )
    def test_intensity_aliases(self, raw, expected):
        assert ExerciseConfig(intensity_type=raw).intensity_type == expected

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("DISTANCE", VolumeType.METROS),
            ("meters", VolumeType.METROS),
            ("time", VolumeType.TIME),
            ("KCAL", VolumeType.KCAL),
        ],
    )
    def test_volume_aliases(self, raw, expected):
        assert ExerciseConfig(volume_type=raw).volume_type == expected

    def test_unknown_volume_type_rejected(self):
        with pytest.raises(ValidationError):
            ExerciseConfig(volume_type="FURLONGS")

    def test_unknown_intensity_type_rejected(self):
        with pytest.raises(ValidationError):
            ExerciseConfig(intensity_type="VIBES")

    def test_negative_rest_rejected(self):
        with pytest.raises(ValidationError):
            ExerciseSet(volume_value=10, rest_seconds=-5)


@pytest.mark.unit
class TestBlockEnums:
    def test_pdp_protocols(self):
        assert ProtocolType.PDP_T.is_pdp
        assert ProtocolType.PDP_R.is_pdp
        assert ProtocolType.PDP_E.is_pdp
        assert not ProtocolType.LIBRE.is_pdp
        assert not ProtocolType.CARDIO.is_pdp

    def test_role_block_types(self):
        assert BlockRole.BUILD_A.block_type == BlockType.BUILD
        assert BlockRole.BURN_B.block_type == BlockType.BURN
        assert BlockRole.BOOST.block_type == BlockType.BOOST


# =============================================================================
# Work items
# =============================================================================


@pytest.mark.unit
class TestWorkItemUnion:
    """The ``type`` tag selects the item class."""

    def test_exercise_tag(self):
        item = TypeAdapter(WorkItem).validate_python({"type": "exercise", "name": "Squat"})
        assert isinstance(item, ExerciseItem)
        assert item.name == "Squat"

    def test_rest_tag(self):
        item = TypeAdapter(WorkItem).validate_python({"type": "rest", "duration_seconds": 90})
        assert isinstance(item, RestItem)
        assert item.duration_seconds == 90

    def test_unknown_tag_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(WorkItem).validate_python({"type": "warmup"})

    def test_models_are_frozen(self):
        item = ExerciseItem(name="Squat")
        with pytest.raises(ValidationError):
            item.name = "Lunge"


@pytest.mark.unit
class TestExerciseItemCopies:
    def test_duplicate_gets_new_id_and_keeps_fields(self):
        item = ExerciseItem(
            name="Squat",
            instructions=["Stand", "Sit"],
            config=ExerciseConfig(sets=[ExerciseSet(volume_value=5, rest_seconds=120)]),
        )
        copy = item.duplicate()

        assert copy.id != item.id
        assert copy.name == item.name
        assert copy.instructions == item.instructions
        assert copy.config == item.config
        assert copy.instructions is not item.instructions

    def test_add_set_copies_last(self):
        item = ExerciseItem(config=ExerciseConfig(sets=[ExerciseSet(volume_value=8, intensity_value=2, rest_seconds=90)]))
        updated = item.add_set()

        assert len(updated.config.sets) == 2
        assert updated.config.sets[1] == updated.config.sets[0]
        assert len(item.config.sets) == 1

    def test_add_set_on_empty_uses_default(self):
        updated = ExerciseItem().add_set()
        assert updated.config.sets == [ExerciseSet(volume_value=10, intensity_value=2, rest_seconds=60)]

    def test_remove_set(self):
        item = ExerciseItem(
            config=ExerciseConfig(sets=[ExerciseSet(volume_value=1), ExerciseSet(volume_value=2)])
        )
        assert [s.volume_value for s in item.remove_set(0).config.sets] == [2]

    def test_remove_set_out_of_range(self):
        with pytest.raises(IndexError):
            ExerciseItem().remove_set(0)

    def test_display_name_prefers_translation(self):
        assert ExerciseItem(name="Squat", translated_name="Sentadilla").display_name == "Sentadilla"
        assert ExerciseItem(name="Squat").display_name == "Squat"


# =============================================================================
# Blocks and sessions
# =============================================================================


@pytest.mark.unit
class TestBlock:
    def test_exercise_count_ignores_rests(self):
        block = Block(items=[ExerciseItem(name="A"), RestItem(), ExerciseItem(name="B")])
        assert block.exercise_count == 2
        assert [e.name for e in block.exercises] == ["A", "B"]

    def test_duplicate_renews_both_identities(self):
        block = Block(name="Main", items=[ExerciseItem(name="A"), RestItem()])
        copy = block.duplicate()

        assert copy.id != block.id
        assert copy.stable_id != block.stable_id
        assert [i.id for i in copy.items] != [i.id for i in block.items]
        assert copy.name == "Main"

    def test_transient_and_lineage_ids_differ(self):
        block = Block()
        assert block.id != block.stable_id


@pytest.mark.unit
class TestSession:
    def test_new_session_defaults(self):
        session = Session.new()
        assert session.title == "New Session"
        assert session.protocol == ProtocolType.LIBRE
        assert len(session.blocks) == 1
        assert session.blocks[0].name == "Block 1"
        assert session.is_empty

    def test_has_default_title(self):
        assert Session(title="").has_default_title
        assert Session(title="New Session").has_default_title
        assert not Session(title="Leg Day").has_default_title

    def test_iter_exercises_in_reading_order(self):
        session = Session(
            blocks=[
                Block(items=[ExerciseItem(name="A"), RestItem()]),
                Block(items=[ExerciseItem(name="B"), ExerciseItem(name="C")]),
            ]
        )
        assert [e.name for e in session.iter_exercises()] == ["A", "B", "C"]
        assert session.exercise_count == 3

    def test_replace_block_returns_new_session(self):
        session = Session.new()
        renamed = session.replace_block(0, session.blocks[0].model_copy(update={"name": "Warmup"}))
        assert renamed.blocks[0].name == "Warmup"
        assert session.blocks[0].name == "Block 1"


@pytest.mark.unit
class TestModule:
    def test_lineage_prefers_stable_id(self):
        assert Module(id="m-1", stable_id="lineage-1", name="Core").lineage_id == "lineage-1"

    def test_lineage_falls_back_to_record_id(self):
        assert Module(id="m-1", name="Core").lineage_id == "m-1"
