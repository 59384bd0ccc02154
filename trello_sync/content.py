"""
Sprint plan content for the MazeBreak board.

Pure data: the workspace, board, lists, labels and the ordered
Sprint 0 cards, plus the Definition of Done applied to every card.
"""

from dataclasses import dataclass
from typing import Optional

DOD_CHECKLIST_TITLE = "Definition of Done (Global)"


@dataclass(frozen=True)
class LabelSpec:
    """A board label, referenced from cards by `key`."""

    key: str
    name: str
    color: str


@dataclass(frozen=True)
class ChecklistSpec:
    """A named checklist with ordered items."""

    title: str
    items: tuple[str, ...] = ()


@dataclass(frozen=True)
class CardSpec:
    """One sprint card."""

    id: str
    title: str
    description: str
    depends_on: tuple[str, ...] = ()
    labels: tuple[str, ...] = ()  # LabelSpec keys
    checklists: tuple[ChecklistSpec, ...] = ()
    dev_notes: Optional[str] = None

    @property
    def board_title(self) -> str:
        """Card title as it appears on the board, prefixed with its ID."""
        return f"[{self.id}] {self.title}"

    @property
    def board_description(self) -> str:
        """Description with the generated Dependency Notes section appended."""
        if self.depends_on:
            notes = "\n".join(f"- Finish: {dep} before this" for dep in self.depends_on)
        else:
            notes = "- None (starting point)"

        return block([
            self.description,
            "",
            "----",
            "## Dependency Notes",
            notes,
        ])


@dataclass(frozen=True)
class BoardPlan:
    """Everything the builder mirrors onto Trello."""

    workspace_name: str
    workspace_description: str
    board_name: str
    board_description: str
    lists: tuple[str, ...]
    target_list: str  # list that receives the cards
    labels: tuple[LabelSpec, ...]
    cards: tuple[CardSpec, ...]
    definition_of_done: tuple[str, ...]

    def validate(self) -> None:
        """
        Check the plan against the sibling-uniqueness rules before any
        remote call is made.

        Raises:
            ValueError: On duplicate natural keys or dangling references.
        """
        _require_unique("list", self.lists)
        _require_unique("label key", [label.key for label in self.labels])
        _require_unique("label", [(label.name, label.color) for label in self.labels])
        _require_unique("card id", [card.id for card in self.cards])
        _require_unique("card title", [card.board_title for card in self.cards])

        if self.target_list not in self.lists:
            raise ValueError(f"Target list {self.target_list!r} is not one of the board lists")

        _require_unique(f"item in {DOD_CHECKLIST_TITLE!r}", self.definition_of_done)

        label_keys = {label.key for label in self.labels}
        card_ids = {card.id for card in self.cards}

        for card in self.cards:
            unknown_labels = [key for key in card.labels if key not in label_keys]
            if unknown_labels:
                raise ValueError(f"Card {card.id} uses unknown labels: {', '.join(unknown_labels)}")

            unknown_deps = [dep for dep in card.depends_on if dep not in card_ids]
            if unknown_deps:
                raise ValueError(f"Card {card.id} depends on unknown cards: {', '.join(unknown_deps)}")

            titles = [DOD_CHECKLIST_TITLE] + [checklist.title for checklist in card.checklists]
            _require_unique(f"checklist on card {card.id}", titles)

            for checklist in card.checklists:
                _require_unique(f"item in {checklist.title!r} on card {card.id}", checklist.items)


def _require_unique(kind: str, values) -> None:
    seen = set()
    for value in values:
        if value in seen:
            raise ValueError(f"Duplicate {kind}: {value!r}")
        seen.add(value)


def block(lines: list[str]) -> str:
    """Join lines into a single multi-line text block."""
    return "\n".join(lines)


# ──────────────── Definition of Done (applies to every card) ────────────────

DEFINITION_OF_DONE = (
    "Runs in Studio with zero errors in Output",
    "Server-authoritative rules not violated (no client damage outcomes)",
    "No gameplay logic placed in Workspace",
    "Code is modular (Managers/Systems), no spaghetti in random scripts",
    "No magic numbers: key constants centralized + named",
    "Basic logging added where it helps debugging (not spammy)",
    "Edge cases handled (nil targets, dead targets, missing humanoid)",
    "Performance sanity: no runaway loops / no heavy per-frame work",
    "Quick manual test performed and recorded in checklist notes (what you tested)",
)

# ──────────────── Board structure ────────────────

SPRINT_0_LIST = "🧪 Sprint 0 – Combat Prototype"

LISTS = (
    SPRINT_0_LIST,
    "🔜 Sprint 1 – Core Loop",
    "📦 Backlog",
    "✅ Done",
)

LABELS = (
    LabelSpec("Architecture", "Architecture", "purple"),
    LabelSpec("Client", "Client", "blue"),
    LabelSpec("Server", "Server", "red"),
    LabelSpec("Combat", "Combat", "orange"),
    LabelSpec("Enemy", "Enemy", "green"),
    LabelSpec("UI", "UI", "yellow"),
    LabelSpec("Polish", "Polish", "pink"),
    LabelSpec("Critical", "Critical", "black"),
)

# Card IDs double as dependency references
GATE = "S0-00"
C1 = "S0-01"
C2 = "S0-02"
C3 = "S0-03"
C4 = "S0-04"
C5 = "S0-05"
C6 = "S0-06"
C7 = "S0-07"
C8 = "S0-08"
EXIT = "S0-09"

# ──────────────── Sprint 0 cards ────────────────

SPRINT_0_CARDS = (
    CardSpec(
        id=GATE,
        title="SPRINT 0 – Gate Rules (Read First)",
        depends_on=(),
        labels=("Critical", "Architecture"),
        description=block([
            "## Sprint Goal",
            "Build a tight, readable, fair combat sandbox proving:",
            "- Combat feels responsive",
            "- Telegraphs are readable",
            "- Damage feels satisfying",
            "- Death feels fair",
            "- Server authority is stable",
            "",
            "## Constraints (Non-Negotiable)",
            "- Solo play only",
            "- Flat test arena only",
            "- 1 enemy (Zombie Tier 1)",
            "- 1 weapon / 1 attack input",
            "- Server-authoritative combat",
            "- Clean Roblox architecture from day one",
            "",
            "## What You DO NOT Build in Sprint 0",
            "- StageManager / procedural rooms",
            "- Loot / XP / economy / DataStore",
            "- Affinity full system (placeholder only)",
            "- Multiple weapons",
            "- Boss",
            "",
            "## Dependency Model",
            "Cards are ordered. Finish earlier IDs first. If you skip dependencies, "
            "you will create bugs and rework.",
        ]),
        checklists=(
            ChecklistSpec("Sprint 0 Setup Checklist", (
                "Confirm test place is a flat arena (no stages)",
                "Confirm only one enemy + one weapon scope",
                "Confirm server owns hit + damage outcomes",
                "Confirm NO gameplay logic in Workspace",
            )),
        ),
        dev_notes=block([
            "DEV NOTES (Architecture & Pitfalls)",
            "- Treat Sprint 0 like building the game's spine.",
            "- If you \"just hack it for now,\" Sprint 1 will collapse under debt.",
            "- Keep every combat decision on server. Client only requests + displays feedback.",
        ]),
    ),
    CardSpec(
        id=C1,
        title="CARD 1 — Project Foundation Setup",
        depends_on=(GATE,),
        labels=("Critical", "Architecture", "Server"),
        description=block([
            "## Objective",
            "Establish clean architecture before writing gameplay logic.",
            "",
            "## Depends On",
            f"- {GATE}",
            "",
            "## Folder Structure (Create Immediately)",
            "ServerScriptService",
            "  - Managers",
            "  - Systems",
            "",
            "ReplicatedStorage",
            "  - Remotes",
            "  - Shared",
            "  - Data",
            "",
            "StarterPlayer",
            "  - StarterPlayerScripts",
            "",
            "## Completion Criteria",
            "- Server boots without errors",
            "- Structure exists exactly as specified",
            "- No combat/health logic yet",
        ]),
        checklists=(
            ChecklistSpec("Execution Checklist (Ordered)", (
                "Create folders exactly as specified (no extras yet)",
                "Create ServerScriptService/Bootstrap.server.lua",
                "Bootstrap prints startup banner + confirms folders/modules found",
                "Add placeholder modules: Managers/CombatManager, Systems/DamageResolver (no logic yet)",
                "Server starts clean with zero errors/warnings",
            )),
        ),
        dev_notes=block([
            "DEV NOTES (Architecture & Pitfalls)",
            "- Put long-lived systems in ServerScriptService as ModuleScripts; bootstrap should be thin.",
            "- Don't start writing gameplay logic until this is clean; otherwise you'll scatter dependencies.",
            "- Keep naming consistent: Managers = orchestration, Systems = pure logic utilities.",
        ]),
    ),
    CardSpec(
        id=C2,
        title="CARD 2 — Remotes + InputController (Client)",
        depends_on=(C1,),
        labels=("Critical", "Client", "Combat"),
        description=block([
            "## Objective",
            "Create responsive attack input that requests server validation.",
            "",
            "## Depends On",
            f"- {C1}",
            "",
            "## RemoteEvent",
            "ReplicatedStorage/Remotes/AttackRequest (RemoteEvent)",
            "",
            "## Client Script",
            "StarterPlayerScripts/InputController.client.lua",
            "",
            "## Responsibilities",
            "- Detect attack input (mouse button 1 or space)",
            "- Fire AttackRequest:FireServer()",
            "- Local throttle ONLY for input feel (visual). Client never decides hit/damage.",
            "",
            "## Completion Criteria",
            "- Clicking/pressing triggers server call",
            "- No spam (client throttle + server validation later)",
            "- No client damage logic anywhere",
        ]),
        checklists=(
            ChecklistSpec("Execution Checklist (Ordered)", (
                "Create AttackRequest RemoteEvent in ReplicatedStorage/Remotes",
                "Create InputController.client.lua in StarterPlayerScripts",
                "Bind attack input (UIS or CAS) and fire AttackRequest:FireServer()",
                "Add local throttle to prevent spam FireServer (visual only)",
                "Test: clicks fire instantly with no console errors",
            )),
            ChecklistSpec("Acceptance Tests", (
                "Spam click does NOT freeze client",
                "Remote fires instantly on input",
                "No client damage calculations exist",
            )),
        ),
        dev_notes=block([
            "DEV NOTES (Architecture & Pitfalls)",
            "- Client throttle is a UX improvement only; server must still enforce real cooldown.",
            "- Don't send 'hit results' from client. Only send \"I attempted attack.\"",
            "- Keep InputController tiny; avoid mixing UI logic in here.",
        ]),
    ),
    CardSpec(
        id=C3,
        title="CARD 3 — CombatManager (Server Authority Core)",
        depends_on=(C2, C1),
        labels=("Critical", "Server", "Combat"),
        description=block([
            "## Objective",
            "Server-authoritative attack validation + hit detection + damage requests.",
            "",
            "## Depends On",
            f"- {C1}",
            f"- {C2}",
            "",
            "## Create",
            "ServerScriptService/Managers/CombatManager.server.lua",
            "",
            "## Responsibilities",
            "- Listen to AttackRequest",
            "- Validate server cooldown per player",
            "- Perform hit detection (Sprint 0 = distance check)",
            "- Call DamageResolver.ApplyDamage(attacker, target, amount)",
            "- Enforce invulnerability window",
            "",
            "## Completion Criteria",
            "- Server rejects spam attacks",
            "- Enemy takes damage via DamageResolver only",
            "- Invulnerability prevents double-hit bug",
        ]),
        checklists=(
            ChecklistSpec("Execution Checklist (Ordered)", (
                "CombatManager listens to AttackRequest.OnServerEvent",
                "Implement server cooldown tracking (lastAttackTime[player])",
                "Implement simple distance hit check vs Zombie",
                "Call DamageResolver.ApplyDamage() on hit",
                "Add invulnerability window logic (i-frames) per target",
                "Test: spam click does not increase DPS beyond cooldown",
            )),
            ChecklistSpec("Acceptance Tests", (
                "No double damage from one click",
                "Attacks miss when out of range",
                "Invuln blocks rapid chain hits",
            )),
        ),
        dev_notes=block([
            "DEV NOTES (Architecture & Pitfalls)",
            "- Keep CombatManager as an orchestrator: validate + route to systems.",
            "- Don't subtract health in CombatManager. Always go through DamageResolver.",
            "- If you add effects, don't hardcode them here—emit events/hooks later.",
        ]),
    ),
    CardSpec(
        id=C4,
        title="CARD 4 — DamageResolver (Single Source of Truth)",
        depends_on=(C3, C1),
        labels=("Critical", "Server", "Architecture"),
        description=block([
            "## Objective",
            "Centralize all damage/death logic in one system.",
            "",
            "## Depends On",
            f"- {C1}",
            f"- {C3}",
            "",
            "## Create",
            "ServerScriptService/Systems/DamageResolver.lua (ModuleScript)",
            "",
            "## API",
            "DamageResolver.ApplyDamage(attacker, target, baseDamage)",
            "",
            "## Completion Criteria",
            "- All damage routed through DamageResolver",
            "- Death triggers once, cleanly",
        ]),
        checklists=(
            ChecklistSpec("Execution Checklist (Ordered)", (
                "Create DamageResolver.ApplyDamage(attacker, target, baseDamage)",
                "Add guards (nil, dead, missing humanoid) + clamp health >= 0",
                "Implement enemy death: delay then Destroy",
                "Implement player death placeholder: disable movement + message",
                "Ensure only DamageResolver modifies health values",
            )),
            ChecklistSpec("Acceptance Tests", (
                "Target death triggers once",
                "No negative HP after repeated hits",
                "No other script subtracts health directly",
            )),
        ),
        dev_notes=block([
            "DEV NOTES (Architecture & Pitfalls)",
            "- This module becomes your long-term combat 'truth.' Keep it clean.",
            "- Make it deterministic and boring (that's good). Effects/juice can layer later.",
            "- Avoid hidden side effects; return a result object later if needed.",
        ]),
    ),
    CardSpec(
        id=C5,
        title="CARD 5 — Enemy: Zombie (Tier 1 State Machine)",
        depends_on=(C4, C3),
        labels=("Critical", "Server", "Enemy", "Combat"),
        description=block([
            "## Objective",
            "One functional enemy with readable telegraphs and fair attacks.",
            "",
            "## Depends On",
            f"- {C3}",
            f"- {C4}",
            "",
            "## Template Location",
            "ServerStorage/EnemyTemplates/Zombie",
            "",
            "## State Machine",
            "Idle -> Chase -> WindUp -> Attack -> Cooldown",
            "",
            "## Fairness Requirement",
            "If player dies and says: \"I didn't see that coming.\" you failed.",
        ]),
        checklists=(
            ChecklistSpec("Execution Checklist (Ordered)", (
                "Create Zombie template in ServerStorage/EnemyTemplates",
                "Implement detection within 25 studs (Idle -> Chase)",
                "Implement MoveTo chase (no pathfinding)",
                "Implement WindUp telegraph (0.5s) before damage",
                "Apply damage via DamageResolver once per swing",
                "Cooldown (1.5s) prevents chain hits",
                "Test: player can back up during wind-up to avoid hit",
            )),
            ChecklistSpec("Acceptance Tests", (
                "Zombie does not hit if player leaves range before attack moment",
                "Zombie cannot deal damage during Cooldown",
                "Telegraph is visually readable and consistent",
            )),
        ),
        dev_notes=block([
            "DEV NOTES (Architecture & Pitfalls)",
            "- Your enemy is a 'teacher'—it teaches fairness through consistent telegraphs.",
            "- Don't hide attack timing in animations only; sync with clear state timing.",
            "- Ensure AI loop isn't running heavy logic every frame. Use heartbeat carefully.",
        ]),
    ),
    CardSpec(
        id=C6,
        title="CARD 6 — Health System + Damage Feedback (Player & Enemy)",
        depends_on=(C4, C5),
        labels=("Critical", "Server", "UI"),
        description=block([
            "## Objective",
            "Health behavior + feedback that supports fairness and readability.",
            "",
            "## Depends On",
            f"- {C4}",
            f"- {C5}",
            "",
            "## Targets",
            "Player: MaxHealth=100, Enemy: Health=50",
        ]),
        checklists=(
            ChecklistSpec("Execution Checklist (Ordered)", (
                "Set player MaxHealth to 100 on spawn",
                "Set zombie health to 50 on spawn",
                "Player damage feedback (flash red + hit sound)",
                "Enemy feedback (flinch / brief pause / reaction)",
                "Player death placeholder (disable movement + fade + message)",
                "Enemy death delay then destroy",
            )),
            ChecklistSpec("Acceptance Tests", (
                "No desync: server is truth",
                "Player can't die twice",
                "Enemy stops acting after death",
            )),
        ),
        dev_notes=block([
            "DEV NOTES (Architecture & Pitfalls)",
            "- Keep feedback decoupled: DamageResolver triggers events/hooks; UI listens.",
            "- Don't mix UI creation with server health logic.",
            "- Clamp and validate everything; early prototypes die from edge cases.",
        ]),
    ),
    CardSpec(
        id=C7,
        title="CARD 7 — Basic HUD (Server-Truth Health Only)",
        depends_on=(C6,),
        labels=("Critical", "Client", "UI"),
        description=block([
            "## Objective",
            "Minimal HUD reflecting real server health.",
            "",
            "## Depends On",
            f"- {C6}",
            "",
            "## UI",
            "- Health bar",
            "- Numeric health display",
        ]),
        checklists=(
            ChecklistSpec("Execution Checklist (Ordered)", (
                "Create ScreenGui with health bar + number",
                "Bind UI updates to replicated health source (Sprint 0 acceptable)",
                "Clamp UI values to 0–100",
                "Test: UI updates immediately on damage",
            )),
            ChecklistSpec("Acceptance Tests", (
                "UI matches server health truth",
                "No heavy per-frame loops for UI updates",
            )),
        ),
        dev_notes=block([
            "DEV NOTES (Architecture & Pitfalls)",
            "- Avoid per-frame polling. Use Changed events where possible.",
            "- Don't 'predict' health client-side. Sprint 0 = trust server.",
            "- Keep HUD simple; this is signal, not polish.",
        ]),
    ),
    CardSpec(
        id=C8,
        title="CARD 8 — Feel Tuning Pass (20+ Fights Minimum)",
        depends_on=(C7,),
        labels=("Critical", "Polish", "Combat"),
        description=block([
            "## Objective",
            "Make it FEEL right. No feature expansion. Only iteration.",
            "",
            "## Depends On",
            f"- {C7}",
            "",
            "## Minimum Playtest",
            "Play 20+ fights.",
        ]),
        checklists=(
            ChecklistSpec("Tuning Runs (Ordered)", (
                "Run 10 fights baseline and note pain points",
                "Adjust one variable at a time (cooldown/range/speed/wind-up/i-frames)",
                "Run 10 fights iteration build and compare",
                "Lock best values and document final tuning numbers in this card",
            )),
            ChecklistSpec("Acceptance Tests", (
                "Telegraphs are readable (you can react consistently)",
                "Spam clicking doesn't dominate",
                "Death feels fair (no surprise hits)",
            )),
        ),
        dev_notes=block([
            "DEV NOTES (Architecture & Pitfalls)",
            "- Don't 'fix' feel by adding features. Fix feel with timing and clarity.",
            "- If it feels cheap, increase telegraph clarity before changing damage numbers.",
            "- Record final values so Sprint 1 doesn't accidentally drift them.",
        ]),
    ),
    CardSpec(
        id=EXIT,
        title="SPRINT 0 EXIT CHECKLIST — Ship/No-Ship Gate",
        depends_on=(C8,),
        labels=("Critical", "Architecture", "Combat"),
        description=block([
            "## You move forward ONLY if ALL checks are true.",
            "",
            "## Depends On",
            f"- {C8}",
            "",
            "If any item fails: you stay in Sprint 0 until it passes.",
        ]),
        checklists=(
            ChecklistSpec("Gate Checks", (
                "Combat responsiveness feels immediate (no noticeable input delay)",
                "Telegraphs readable (player can react during wind-up)",
                "Damage satisfying (clear feedback on hit)",
                "No chain-death / double-hit bug",
                "Server rejects spam attacks reliably",
                "Health UI matches server truth",
                "No major errors in Output during play",
                "Death feels fair (no surprise hits)",
            )),
        ),
        dev_notes=block([
            "DEV NOTES (Architecture & Pitfalls)",
            "- This is your quality gate. If you skip it, you'll build a bigger bad game faster.",
            "- 'Mostly works' is not good enough for combat.",
        ]),
    ),
)

SPRINT_0_PLAN = BoardPlan(
    workspace_name="MazeBreak Development",
    workspace_description=(
        "Workspace for MazeBreak Roblox game development (Sprint-driven execution)."
    ),
    board_name="MazeBreak – Core Development",
    board_description=(
        "Sprint board for MazeBreak. Sprint 0 is a combat sandbox gate. "
        "No gate pass = no Sprint 1."
    ),
    lists=LISTS,
    target_list=SPRINT_0_LIST,
    labels=LABELS,
    cards=SPRINT_0_CARDS,
    definition_of_done=DEFINITION_OF_DONE,
)
