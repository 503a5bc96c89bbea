"""Public profiles of the agents and their publication as metadata."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

_BANNER = "https://images.example.com/fux-family-banner.png"
_NIP05 = "thefux@example.com"
_LUD16 = "thefux@example.com"

_TYPE_TO_PROFILE = {
    "search": "scout",
    "goose": "coder",
    "enhanced": "manager",
    "chat": "communicator",
    "combined": "specialist",
}

Publish = Callable[[dict[str, str]], Awaitable[object]]


def _is_url(text: str) -> bool:
    parsed = urlparse(text)
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)


@dataclass
class AgentProfile:
    """Name, description and links shown for an agent."""

    name: str
    display_name: str
    about: str
    picture: str | None = None
    banner: str | None = None
    nip05: str | None = None
    lud16: str | None = None

    @classmethod
    def main_orchestrator(cls) -> "AgentProfile":
        """Profile of the lead agent."""
        return cls(
            name="thefux_orchestrator",
            display_name="🧠 The Fux Orchestrator",
            about=(
                "💎 Lead AI Agent from The Fux Family 💎\n\n"
                "🎯 Master of intelligent agent coordination and orchestration\n"
                "🤖 Commands multiple specialized AI agents with superintelligence\n"
                "⚡ Expert in: Multi-agent systems, task decomposition, resource management\n"
                "🧠 Advanced capabilities: Request analysis, keyword detection, smart coordination\n\n"
                "🔥 THE FUX FAMILY - Elite AI Agent Collective 🔥\n"
                "📡 Delivering results with precision and style\n"
                "🚀 \"Intelligence without limits, coordination without boundaries\"\n\n"
                "💬 Send me complex requests and watch the magic happen!"
            ),
            picture="https://images.example.com/fux-orchestrator.png",
            banner=_BANNER,
            nip05=_NIP05,
            lud16=_LUD16,
        )

    @classmethod
    def progress_reporter(cls) -> "AgentProfile":
        """Profile of the agent that posts progress updates."""
        return cls(
            name="thefux_progress",
            display_name="📊 The Fux Progress Reporter",
            about=(
                "💎 Progress & Debug Agent from The Fux Family 💎\n\n"
                "📊 Real-time agent monitoring and progress tracking specialist\n"
                "🔍 Expert in: System diagnostics, performance metrics, debug insights\n"
                "📡 Provides detailed progress updates and system visibility\n"
                "⚡ Advanced monitoring: Agent lifecycle, resource usage, orchestration flow\n\n"
                "🔥 THE FUX FAMILY - Elite AI Agent Collective 🔥\n"
                "📈 Transparent operations, detailed insights, zero blind spots\n"
                "🚀 \"Every detail matters, every progress counts\"\n\n"
                "📋 I keep you informed on everything happening behind the scenes!"
            ),
            picture="https://images.example.com/fux-progress.png",
            banner=_BANNER,
            nip05=_NIP05,
            lud16=_LUD16,
        )

    @classmethod
    def agent_profiles(cls) -> dict[str, "AgentProfile"]:
        """Profiles of the specialised agents, keyed by role."""
        return {
            "scout": cls(
                name="thefux_scout",
                display_name="🔍 The Fux Scout",
                about=(
                    "💎 Information Gathering Specialist from The Fux Family 💎\n\n"
                    "🔍 Elite search and reconnaissance agent\n"
                    "⚡ Expert in: Web research, data mining, intelligence gathering\n"
                    "🎯 Advanced capabilities: Real-time search, trend analysis, market intelligence\n"
                    "📊 Specialized tools: SearXNG integration, news aggregation, price tracking\n\n"
                    "🔥 THE FUX FAMILY - Elite AI Agent Collective 🔥\n"
                    "🌐 \"No information is too hidden, no data is out of reach\"\n\n"
                    "📡 Send me your research requests!"
                ),
                picture="https://images.example.com/fux-scout.png",
                banner=_BANNER,
                nip05=_NIP05,
                lud16=_LUD16,
            ),
            "coder": cls(
                name="thefux_coder",
                display_name="💻 The Fux Coder",
                about=(
                    "💎 Development & Engineering Expert from The Fux Family 💎\n\n"
                    "💻 Elite software development and engineering agent\n"
                    "⚡ Expert in: Full-stack development, debugging, system architecture\n"
                    "🎯 Advanced capabilities: Code generation, bug fixes, deployment automation\n"
                    "🔧 Specialized tools: Goose integration, testing frameworks, CI/CD pipelines\n\n"
                    "🔥 THE FUX FAMILY - Elite AI Agent Collective 🔥\n"
                    "🚀 \"Code with precision, deploy with confidence\"\n\n"
                    "💬 Bring me your development challenges!"
                ),
                picture="https://images.example.com/fux-coder.png",
                banner=_BANNER,
                nip05=_NIP05,
                lud16=_LUD16,
            ),
            "manager": cls(
                name="thefux_manager",
                display_name="📋 The Fux Manager",
                about=(
                    "💎 Project Management & Organization Expert from The Fux Family 💎\n\n"
                    "📋 Elite project coordination and organizational agent\n"
                    "⚡ Expert in: Project planning, workflow optimization, team coordination\n"
                    "🎯 Advanced capabilities: Task management, documentation, milestone tracking\n"
                    "📊 Specialized tools: Note systems, event management, progress tracking\n\n"
                    "🔥 THE FUX FAMILY - Elite AI Agent Collective 🔥\n"
                    "🎯 \"Organize with purpose, execute with precision\"\n\n"
                    "📈 Let me streamline your projects!"
                ),
                picture="https://images.example.com/fux-manager.png",
                banner=_BANNER,
                nip05=_NIP05,
                lud16=_LUD16,
            ),
            "communicator": cls(
                name="thefux_comm",
                display_name="📡 The Fux Communicator",
                about=(
                    "💎 Communication & Coordination Specialist from The Fux Family 💎\n\n"
                    "📡 Elite communication and coordination agent\n"
                    "⚡ Expert in: Message routing, team communication, stakeholder coordination\n"
                    "🎯 Advanced capabilities: Multi-channel messaging, broadcast systems, alerts\n"
                    "💬 Specialized tools: Nostr integration, notification systems, status updates\n\n"
                    "🔥 THE FUX FAMILY - Elite AI Agent Collective 🔥\n"
                    "📢 \"Connect everyone, miss nothing\"\n\n"
                    "🌐 I'll handle your communication needs!"
                ),
                picture="https://images.example.com/fux-comm.png",
                banner=_BANNER,
                nip05=_NIP05,
                lud16=_LUD16,
            ),
            "specialist": cls(
                name="thefux_specialist",
                display_name="⚡ The Fux Specialist",
                about=(
                    "💎 Multi-Domain Expert from The Fux Family 💎\n\n"
                    "⚡ Elite multi-capability and specialized operations agent\n"
                    "🎯 Expert in: Cross-domain tasks, complex workflows, integrated solutions\n"
                    "🔥 Advanced capabilities: End-to-end execution, multi-tool orchestration\n"
                    "🚀 Specialized tools: Combined toolchains, workflow automation, system integration\n\n"
                    "🔥 THE FUX FAMILY - Elite AI Agent Collective 🔥\n"
                    "💎 \"One agent, infinite capabilities\"\n\n"
                    "🌟 Ready for your most complex challenges!"
                ),
                picture="https://images.example.com/fux-specialist.png",
                banner=_BANNER,
                nip05=_NIP05,
                lud16=_LUD16,
            ),
        }

    def to_metadata(self) -> dict[str, str]:
        """Profile metadata; picture and banner are left out unless they are URLs."""
        metadata = {
            "name": self.name,
            "display_name": self.display_name,
            "about": self.about,
        }
        if self.picture is not None and _is_url(self.picture):
            metadata["picture"] = self.picture
        if self.banner is not None and _is_url(self.banner):
            metadata["banner"] = self.banner
        if self.nip05 is not None:
            metadata["nip05"] = self.nip05
        if self.lud16 is not None:
            metadata["lud16"] = self.lud16
        return metadata


async def setup_agent_profile(publish: Publish, profile: AgentProfile) -> None:
    """Publish the profile's metadata; errors from ``publish`` propagate."""
    logger.info("Setting up profile for %s", profile.display_name)
    await publish(profile.to_metadata())
    logger.info("✅ Profile setup complete for %s", profile.display_name)


def get_agent_profile_for_type(agent_type: str) -> AgentProfile:
    """The profile for a kind of agent; unknown kinds get the specialist."""
    key = _TYPE_TO_PROFILE.get(agent_type, "specialist")
    return AgentProfile.agent_profiles()[key]