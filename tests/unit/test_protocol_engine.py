"""
Unit tests for applying PDP protocols to sessions and blocks.

Tests for:
- Canonical 6-block / 9-slot layout for every PDP protocol
- Identity-preserving merge, placeholders and overflow warnings
- Confirmation gate, LIBRE and CARDIO handling
- Lineage (stable_id) preservation on reapplication
- Block-level protocol overrides
"""

import pytest

from backend.core.cardio import enable_cardio
from backend.core.protocol_engine import (
    CardioSessionError,
    apply_block_protocol,
    apply_session_protocol,
    infer_block_type,
    needs_confirmation,
)
from backend.core.protocol_templates import SESSION_DESCRIPTIONS
from domain.models import (
    Block,
    BlockParams,
    BlockRole,
    BlockType,
    ExerciseConfig,
    ExerciseItem,
    ExerciseSet,
    ProtocolType,
    RestItem,
    Session,
    VolumeType,
)

PDP_PROTOCOLS = [ProtocolType.PDP_T, ProtocolType.PDP_R, ProtocolType.PDP_E]
ROLE_ORDER = [BlockRole.BOOST, BlockRole.BASE, BlockRole.BUILD_A, BlockRole.BUILD_B, BlockRole.BURN_A, BlockRole.BURN_B]


def _session_with(names, per_block: int = 3) -> Session:
    exercises = [
        ExerciseItem(name=n, media_url=f"https://img/{n}.jpg", pattern="Squat", equipment="Barbell")
        for n in names
    ]
    blocks = [Block(name=f"Block {i // per_block + 1}", items=exercises[i:i + per_block]) for i in range(0, len(exercises), per_block)]
    return Session(title="My Session", blocks=blocks or [Block(name="Block 1")])


@pytest.mark.unit
class TestCanonicalLayout:
    @pytest.mark.parametrize("protocol", PDP_PROTOCOLS)
    def test_six_blocks_nine_slots_three_grouped(self, protocol):
        result = apply_session_protocol(_session_with(["A", "B", "C", "D"]), protocol, confirmed=True)
        session = result.session

        assert [b.role for b in session.blocks] == ROLE_ORDER
        exercises = list(session.iter_exercises())
        assert len(exercises) == 9
        assert sum(1 for e in exercises if e.is_grouped) == 3
        assert result.restructured is True

    @pytest.mark.parametrize("protocol", PDP_PROTOCOLS)
    def test_title_description_and_tag(self, protocol):
        session = apply_session_protocol(Session.new(), protocol).session
        assert session.title == f"Session {protocol.value}"
        assert session.description == SESSION_DESCRIPTIONS[protocol]
        assert session.protocol == protocol

    def test_block_params_follow_protocol(self):
        session = apply_session_protocol(Session.new(), ProtocolType.PDP_E).session
        assert [b.params.emom_minutes for b in session.blocks] == [4, 4, 5, 5, 6, 6]
        assert all(b.params.time_cap_seconds is None for b in session.blocks)


@pytest.mark.unit
class TestMerge:
    def test_pdp_r_from_single_squat(self):
        session = Session(title="Legs", blocks=[Block(items=[ExerciseItem(name="Squat")])])

        result = apply_session_protocol(session, ProtocolType.PDP_R, confirmed=True)
        blocks = result.session.blocks

        assert len(blocks) == 6
        squat, second = blocks[0].items
        assert squat.name == "Squat"
        assert squat.config.volume_type == VolumeType.REPS
        assert [(s.volume_value, s.rest_seconds) for s in squat.config.sets] == [(15, 0)]
        assert second.name == "Exercise 2"
        assert second.is_grouped is True
        assert second.config.sets[0].volume_value == 15
        remaining = [item for block in blocks[1:] for item in block.items]
        assert len(remaining) == 7
        assert all(item.name.startswith("Exercise ") for item in remaining)

    def test_identity_kept_config_and_grouping_overwritten(self):
        original = ExerciseItem(
            name="Front Squat",
            translated_name="Sentadilla frontal",
            media_url="https://img/fs.jpg",
            description="Bar on the front rack",
            pattern="Squat",
            equipment="Barbell",
            is_grouped=True,
            config=ExerciseConfig(volume_type="KCAL", sets=[ExerciseSet(volume_value=99, rest_seconds=180)]),
        )
        session = Session(title="S", blocks=[Block(items=[ExerciseItem(name="First"), original])])

        migrated = apply_session_protocol(session, ProtocolType.PDP_T, confirmed=True).session.blocks[0].items[1]

        assert migrated.name == "Front Squat"
        assert migrated.translated_name == "Sentadilla frontal"
        assert migrated.media_url == "https://img/fs.jpg"
        assert migrated.description == "Bar on the front rack"
        assert migrated.equipment == "Barbell"
        assert migrated.id != original.id
        assert migrated.config.volume_type == VolumeType.TIME
        assert migrated.config.sets[0].volume_value == 120
        assert migrated.is_grouped is True

    def test_reading_order_across_blocks_and_rests(self):
        session = Session(
            title="S",
            blocks=[
                Block(items=[ExerciseItem(name="A"), RestItem(), ExerciseItem(name="B")]),
                Block(items=[ExerciseItem(name="C")]),
            ],
        )
        result = apply_session_protocol(session, ProtocolType.PDP_T, confirmed=True)
        names = [e.name for e in result.session.iter_exercises()]
        assert names[:3] == ["A", "B", "C"]
        assert not any(isinstance(i, RestItem) for b in result.session.blocks for i in b.items)

    def test_reapplying_is_idempotent(self):
        session = _session_with([f"Ex{i}" for i in range(9)])

        once = apply_session_protocol(session, ProtocolType.PDP_T, confirmed=True).session
        twice = apply_session_protocol(once, ProtocolType.PDP_T, confirmed=True).session

        identity = lambda s: [(e.name, e.media_url, e.pattern, e.equipment) for e in s.iter_exercises()]
        assert identity(once) == identity(twice)
        assert [e.name for e in once.iter_exercises()] == [f"Ex{i}" for i in range(9)]

    def test_stable_ids_preserved_on_reapplication(self):
        once = apply_session_protocol(Session.new(), ProtocolType.PDP_T).session
        switched = apply_session_protocol(once, ProtocolType.PDP_E, confirmed=True).session

        assert [b.stable_id for b in switched.blocks] == [b.stable_id for b in once.blocks]
        assert [b.id for b in switched.blocks] != [b.id for b in once.blocks]

    def test_first_application_matches_stable_ids_by_position(self):
        session = _session_with(["A", "B", "C", "D"], per_block=2)
        lineage = [b.stable_id for b in session.blocks]

        result = apply_session_protocol(session, ProtocolType.PDP_R, confirmed=True).session

        assert [b.stable_id for b in result.blocks[:2]] == lineage
        assert len({b.stable_id for b in result.blocks}) == 6

    def test_overflow_is_reported(self, caplog):
        session = _session_with([f"Ex{i}" for i in range(11)])

        with caplog.at_level("WARNING"):
            result = apply_session_protocol(session, ProtocolType.PDP_R, confirmed=True)

        assert [e.name for e in result.discarded] == ["Ex9", "Ex10"]
        assert len(result.warnings) == 1
        assert "Ex9" in result.warnings[0]
        assert "did not fit" in caplog.text

    def test_input_session_untouched(self):
        session = _session_with(["A", "B"])
        before = session.model_dump()
        apply_session_protocol(session, ProtocolType.PDP_E, confirmed=True)
        assert session.model_dump() == before


@pytest.mark.unit
class TestGatesAndModes:
    def test_unconfirmed_updates_tag_only(self):
        session = _session_with(["A", "B"])

        result = apply_session_protocol(session, ProtocolType.PDP_T)

        assert result.needs_confirmation is True
        assert result.restructured is False
        assert result.session.protocol == ProtocolType.PDP_T
        assert result.session.blocks == session.blocks
        assert result.warnings

    def test_empty_session_needs_no_confirmation(self):
        assert needs_confirmation(Session.new()) is False
        assert apply_session_protocol(Session.new(), ProtocolType.PDP_T).restructured is True

    def test_libre_clears_tag_and_params_only(self):
        templated = apply_session_protocol(Session.new(), ProtocolType.PDP_T).session
        overridden = templated.replace_block(0, templated.blocks[0].model_copy(update={"protocol": ProtocolType.PDP_R}))

        result = apply_session_protocol(overridden, ProtocolType.LIBRE)

        assert result.session.protocol == ProtocolType.LIBRE
        assert all(b.params is None and b.protocol is None for b in result.session.blocks)
        assert [b.items for b in result.session.blocks] == [b.items for b in overridden.blocks]
        assert result.session.title == overridden.title

    def test_libre_leaves_cardio_mode(self):
        cardio = enable_cardio(Session.new())

        result = apply_session_protocol(cardio, ProtocolType.LIBRE)

        assert result.session.is_cardio is False
        assert result.session.protocol == ProtocolType.LIBRE
        reapplied = apply_session_protocol(result.session, ProtocolType.PDP_T, confirmed=True)
        assert reapplied.session.protocol == ProtocolType.PDP_T

    def test_cardio_session_rejects_pdp(self):
        session = Session(title="Run", is_cardio=True, blocks=[Block(items=[ExerciseItem(name="Run")])])
        with pytest.raises(CardioSessionError):
            apply_session_protocol(session, ProtocolType.PDP_R, confirmed=True)

    def test_cardio_protocol_enables_cardio_mode(self):
        result = apply_session_protocol(Session.new(), "CARDIO")
        assert result.session.is_cardio is True
        assert result.session.protocol == ProtocolType.CARDIO

    def test_unknown_protocol_rejected(self):
        with pytest.raises(ValueError):
            apply_session_protocol(Session.new(), "PDP-X")


@pytest.mark.unit
class TestInferBlockType:
    def test_role_wins(self):
        assert infer_block_type(Block(name="BASE", role=BlockRole.BURN_A), 0) == BlockType.BURN

    def test_name_contains_type(self):
        assert infer_block_type(Block(name="Final burn"), 0) == BlockType.BURN

    def test_position_fallback(self):
        assert [infer_block_type(Block(name="Main"), i) for i in range(7)] == [
            BlockType.BOOST,
            BlockType.BASE,
            BlockType.BUILD,
            BlockType.BUILD,
            BlockType.BURN,
            BlockType.BURN,
            BlockType.BASE,
        ]


@pytest.mark.unit
class TestBlockProtocol:
    @pytest.fixture
    def session(self) -> Session:
        return Session(
            title="S",
            blocks=[
                Block(name="Warmup", items=[]),
                Block(name="Burn finisher", items=[ExerciseItem(name="Burpee", media_url="https://img/b.jpg")]),
            ],
        )

    def test_pads_to_canonical_count(self, session: Session):
        result = apply_block_protocol(session, 1, ProtocolType.PDP_T, confirmed=True)
        block = result.session.blocks[1]

        assert block.protocol == ProtocolType.PDP_T
        assert block.params == BlockParams(time_cap_seconds=360)
        burpee, placeholder = block.items
        assert burpee.name == "Burpee"
        assert burpee.media_url == "https://img/b.jpg"
        assert burpee.config.shared_time is True
        assert placeholder.name == "Exercise 2"
        assert placeholder.is_grouped is True
        assert result.session.blocks[0] == session.blocks[0]

    def test_keeps_extra_exercises(self, session: Session):
        block = Block(name="BASE", items=[ExerciseItem(name=n) for n in ("A", "B", "C")])
        result = apply_block_protocol(Session(title="S", blocks=[block]), 0, ProtocolType.PDP_R, confirmed=True)
        assert [e.name for e in result.session.blocks[0].exercises] == ["A", "B", "C"]
        assert all(e.config.sets[0].volume_value == 30 for e in result.session.blocks[0].exercises)

    def test_unconfirmed_sets_override_only(self, session: Session):
        result = apply_block_protocol(session, 1, ProtocolType.PDP_E)
        block = result.session.blocks[1]
        assert block.protocol == ProtocolType.PDP_E
        assert block.items == session.blocks[1].items
        assert result.needs_confirmation is True
        assert needs_confirmation(session, 1) is True

    def test_empty_block_applies_without_confirmation(self, session: Session):
        block = apply_block_protocol(session, 0, ProtocolType.PDP_R).session.blocks[0]
        assert len(block.items) == 2
        assert block.params.target_reps == 30

    def test_libre_override_clears_params(self, session: Session):
        applied = apply_block_protocol(session, 1, ProtocolType.PDP_T, confirmed=True).session
        block = apply_block_protocol(applied, 1, ProtocolType.LIBRE).session.blocks[1]
        assert block.protocol == ProtocolType.LIBRE
        assert block.params is None

    def test_cardio_rejected_for_block(self, session: Session):
        with pytest.raises(ValueError):
            apply_block_protocol(session, 0, ProtocolType.CARDIO)

    def test_cardio_session_rejects_block_pdp(self, session: Session):
        with pytest.raises(CardioSessionError):
            apply_block_protocol(session.model_copy(update={"is_cardio": True}), 0, ProtocolType.PDP_T)

    def test_bad_block_index(self, session: Session):
        with pytest.raises(IndexError):
            apply_block_protocol(session, 5, ProtocolType.PDP_T)
