"""
Evolution graph builder.

An evolution-chain resource is a recursive tree. It is parsed into
``ChainNode`` values, turned into write commands by a pure traversal and
only then persisted, so parsing and persistence stay separate.

The "evolves from" back-reference is not written during the walk. Species
ingestion records ``species -> parent`` in the run context and a second
pass applies it once both species are known to exist.
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple, Union

from ingestion.context import RunContext
from ingestion.loaders.upsert import UpsertEngine
from ingestion.registry import EntityKind
from models.evolution import PokemonEvolution
from models.species import PokemonSpecies
from schemas.resources import ChainLink, EvolutionDetail, ref_id
import logging

logger = logging.getLogger(__name__)


# ============================================================================
# Parsed structure
# ============================================================================

@dataclass(frozen=True)
class EvolutionRequirement:
    """One way to evolve; identity is the full tuple of conditions"""
    evolution_trigger_id: int
    evolution_item_id: Optional[int] = None
    gender_id: Optional[int] = None
    location_id: Optional[int] = None
    held_item_id: Optional[int] = None
    known_move_id: Optional[int] = None
    known_move_type_id: Optional[int] = None
    party_species_id: Optional[int] = None
    party_type_id: Optional[int] = None
    trade_species_id: Optional[int] = None
    min_level: Optional[int] = None
    time_of_day: Optional[str] = None
    min_happiness: Optional[int] = None
    min_beauty: Optional[int] = None
    min_affection: Optional[int] = None
    needs_overworld_rain: bool = False
    relative_physical_stats: Optional[int] = None
    turn_upside_down: bool = False

    @classmethod
    def from_detail(cls, detail: EvolutionDetail) -> Optional["EvolutionRequirement"]:
        """None when the detail has no trigger"""
        trigger_id = ref_id(detail.trigger)
        if trigger_id is None:
            return None
        return cls(
            evolution_trigger_id=trigger_id,
            evolution_item_id=ref_id(detail.item),
            gender_id=detail.gender,
            location_id=ref_id(detail.location),
            held_item_id=ref_id(detail.held_item),
            known_move_id=ref_id(detail.known_move),
            known_move_type_id=ref_id(detail.known_move_type),
            party_species_id=ref_id(detail.party_species),
            party_type_id=ref_id(detail.party_type),
            trade_species_id=ref_id(detail.trade_species),
            min_level=detail.min_level,
            time_of_day=detail.time_of_day or None,
            min_happiness=detail.min_happiness,
            min_beauty=detail.min_beauty,
            min_affection=detail.min_affection,
            needs_overworld_rain=bool(detail.needs_overworld_rain),
            relative_physical_stats=detail.relative_physical_stats,
            turn_upside_down=bool(detail.turn_upside_down),
        )

    def criteria(self, species_id: int) -> Dict[str, object]:
        values = {"pokemon_species_id": species_id}
        values.update(asdict(self))
        return values


@dataclass
class ChainNode:
    species_id: int
    species_name: Optional[str]
    requirements: List[EvolutionRequirement] = field(default_factory=list)
    children: List["ChainNode"] = field(default_factory=list)
    skipped_details: int = 0


def parse_chain(link: ChainLink) -> Optional[ChainNode]:
    """Build the node tree; links without a species id are dropped with their subtree"""
    species_id = link.species.id
    if species_id is None:
        logger.warning(f"Evolution node {link.species.name} has no species id, skipping subtree")
        return None

    node = ChainNode(species_id=species_id, species_name=link.species.name)
    for detail in link.evolution_details:
        requirement = EvolutionRequirement.from_detail(detail)
        if requirement is None:
            node.skipped_details += 1
        elif requirement not in node.requirements:
            node.requirements.append(requirement)

    for child_link in link.evolves_to:
        child = parse_chain(child_link)
        if child is not None:
            node.children.append(child)
    return node


# ============================================================================
# Write commands
# ============================================================================

@dataclass(frozen=True)
class StampChainCommand:
    species_ids: Tuple[int, ...]
    chain_id: int


@dataclass(frozen=True)
class CreateRequirementCommand:
    parent_species_id: int
    species_id: int
    requirement: EvolutionRequirement


ChainCommand = Union[StampChainCommand, CreateRequirementCommand]


def plan_chain_writes(chain_id: int, root: ChainNode) -> List[ChainCommand]:
    """
    Depth-first walk emitting one requirement command per child requirement,
    followed by a single stamp of every chain member.

    The stamp marks the chain as done for the next run, so it comes last.
    """
    commands: List[ChainCommand] = []

    def walk(node: ChainNode) -> None:
        for child in node.children:
            for requirement in child.requirements:
                commands.append(CreateRequirementCommand(
                    parent_species_id=node.species_id,
                    species_id=child.species_id,
                    requirement=requirement,
                ))
            walk(child)

    walk(root)
    commands.append(StampChainCommand(species_ids=tuple(chain_members(root)), chain_id=chain_id))
    return commands


def chain_members(root: ChainNode) -> List[int]:
    members: List[int] = []
    stack = [root]
    while stack:
        node = stack.pop()
        members.append(node.species_id)
        stack.extend(reversed(node.children))
    return members


# ============================================================================
# Cross-chain lineages
# ============================================================================

def resolve_lineages(
    chains: Mapping[int, Iterable[int]],
    species_chain: Mapping[int, int],
    evolves_from: Mapping[int, int]
) -> Dict[int, List[int]]:
    """
    Merge cross-chain evolutions into coherent lineages.

    Args:
        chains: chain id -> species ids that appear in that chain's tree
        species_chain: species id -> chain id the species is recorded under
        evolves_from: species id -> parent species id

    A species is absorbed into a chain when it appears in the chain's tree
    but is recorded under another chain, or when it evolves from / into a
    member while being recorded elsewhere. A chain whose members are all
    already covered by another lineage is dropped as redundant.
    """
    children_of: Dict[int, Set[int]] = {}
    for child, parent in evolves_from.items():
        children_of.setdefault(parent, set()).add(child)

    lineages: Dict[int, List[int]] = {}
    for chain_id, members in chains.items():
        lineage = list(dict.fromkeys(members))
        member_set = set(lineage)
        frontier = list(lineage)

        while frontier:
            species_id = frontier.pop()
            neighbours = set(children_of.get(species_id, ()))
            parent = evolves_from.get(species_id)
            if parent is not None:
                neighbours.add(parent)

            for other in neighbours:
                if other in member_set:
                    continue
                if species_chain.get(other, chain_id) == chain_id:
                    continue
                member_set.add(other)
                lineage.append(other)
                frontier.append(other)

        lineages[chain_id] = lineage

    resolved: Dict[int, List[int]] = {}
    for chain_id in sorted(lineages, key=lambda cid: (-len(lineages[cid]), cid)):
        members = set(lineages[chain_id])
        absorbed = any(
            members <= set(kept)
            for kept in resolved.values()
        )
        if absorbed:
            logger.debug(f"Evolution chain {chain_id} fully absorbed by another lineage, dropping")
            continue
        resolved[chain_id] = lineages[chain_id]

    return resolved


# ============================================================================
# Persistence
# ============================================================================

class EvolutionGraphBuilder:
    """Applies parsed chains and the evolves-from map to the store"""

    def __init__(self, engine: UpsertEngine, context: RunContext):
        self.engine = engine
        self.context = context

    async def apply(self, chain_id: int, root: ChainNode) -> Tuple[int, int]:
        """
        Persist one chain.

        Requirement rows are written before the species are stamped with the
        chain, so a chain interrupted half-way is processed again next run.

        Returns:
            (species stamped, requirement rows created)
        """
        stamped = 0
        created = 0

        for command in plan_chain_writes(chain_id, root):
            if isinstance(command, StampChainCommand):
                present = []
                for species_id in command.species_ids:
                    if await self.engine.exists(EntityKind.POKEMON_SPECIES, species_id):
                        present.append(species_id)
                    else:
                        logger.warning(f"Species {species_id} of evolution chain {chain_id} not found")
                await self.engine.update_many(
                    PokemonSpecies, present, {"evolution_chain_id": command.chain_id}
                )
                stamped += len(present)
                continue

            if not await self.engine.exists(EntityKind.POKEMON_SPECIES, command.species_id):
                continue
            _, was_created = await self.engine.find_or_create(
                PokemonEvolution,
                command.requirement.criteria(command.species_id)
            )
            if was_created:
                created += 1
                logger.debug(
                    f"Created evolution {command.parent_species_id} -> {command.species_id}"
                )

        return stamped, created

    async def apply_evolves_from(self) -> int:
        """
        Write ``evolves_from_species_id`` for every recorded mapping whose two
        species exist, then clear the mapping.
        """
        applied = 0
        mappings = dict(self.context.evolution_mappings)

        for species_id, parent_id in mappings.items():
            if not (
                await self.engine.exists(EntityKind.POKEMON_SPECIES, species_id)
                and await self.engine.exists(EntityKind.POKEMON_SPECIES, parent_id)
            ):
                logger.warning(
                    f"Skipping evolves-from {species_id} <- {parent_id}: species not found"
                )
                continue

            await self.engine.update_fields(
                PokemonSpecies, species_id, {"evolves_from_species_id": parent_id}
            )
            applied += 1

        logger.info(f"Applied {applied}/{len(mappings)} evolves-from relationships")
        self.context.evolution_mappings.clear()
        return applied

    async def resolve_lineages(self, chains: Mapping[int, Iterable[int]]) -> Dict[int, List[int]]:
        """
        Resolve cross-chain lineages for the given chains.

        The chain a species is recorded under comes from species ingestion
        when still in memory, otherwise from the stored chain stamp. The
        species -> chain map is cleared afterwards.
        """
        chains = {chain_id: list(members) for chain_id, members in chains.items()}
        rows = await self.engine.select_rows(
            PokemonSpecies.id,
            PokemonSpecies.evolution_chain_id,
            PokemonSpecies.evolves_from_species_id
        )
        species_chain = {sid: cid for sid, cid, _ in rows if cid is not None}
        species_chain.update(self.context.evolution_chain_mappings)
        evolves_from = {sid: parent for sid, _, parent in rows if parent is not None}

        lineages = resolve_lineages(chains, species_chain, evolves_from)
        dropped = len(chains) - len(lineages)
        absorbed = sum(
            len(set(members) - set(chains[cid])) for cid, members in lineages.items()
        )
        logger.info(
            f"Resolved {len(lineages)} evolution lineages "
            f"({absorbed} cross-chain species absorbed, {dropped} chains dropped)"
        )
        self.context.lineages.update(lineages)
        self.context.evolution_chain_mappings.clear()
        return lineages
