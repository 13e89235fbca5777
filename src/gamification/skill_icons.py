"""Skill icon catalogue: skill name -> icon class, plus skill categories"""

DEFAULT_ICON = "fa-solid fa-code"

SKILL_ICONS: dict[str, str] = {
    # Languages
    "javascript": "fa-brands fa-js",
    "typescript": "fa-brands fa-js",
    "python": "fa-brands fa-python",
    "java": "fa-brands fa-java",
    "php": "fa-brands fa-php",
    "c": "fa-solid fa-c",
    "c++": "fa-solid fa-code",
    "c#": "fa-brands fa-microsoft",
    "swift": "fa-brands fa-swift",
    "kotlin": "fa-brands fa-android",
    "go": "fa-brands fa-golang",
    "rust": "fa-solid fa-gear",
    "dart": "fa-solid fa-bullseye",
    "ruby": "fa-solid fa-gem",
    "scala": "fa-solid fa-s",
    "r": "fa-solid fa-r",
    "sql": "fa-solid fa-database",

    # Frontend frameworks
    "react": "fa-brands fa-react",
    "vue": "fa-brands fa-vuejs",
    "angular": "fa-brands fa-angular",
    "svelte": "fa-solid fa-fire",
    "next.js": "fa-solid fa-n",
    "nextjs": "fa-solid fa-n",
    "nuxt": "fa-brands fa-vuejs",
    "gatsby": "fa-solid fa-g",

    # Web
    "html": "fa-brands fa-html5",
    "css": "fa-brands fa-css3-alt",
    "sass": "fa-brands fa-sass",
    "tailwind": "fa-solid fa-wind",
    "bootstrap": "fa-brands fa-bootstrap",

    # Backend frameworks
    "node": "fa-brands fa-node-js",
    "nodejs": "fa-brands fa-node-js",
    "node.js": "fa-brands fa-node-js",
    "express": "fa-brands fa-node-js",
    "django": "fa-brands fa-python",
    "flask": "fa-brands fa-python",
    "fastapi": "fa-brands fa-python",
    "laravel": "fa-brands fa-laravel",
    "spring": "fa-solid fa-leaf",
    "rails": "fa-solid fa-gem",

    # Databases
    "mongodb": "fa-solid fa-leaf",
    "mysql": "fa-solid fa-database",
    "postgresql": "fa-solid fa-database",
    "firebase": "fa-solid fa-fire",
    "supabase": "fa-solid fa-bolt",
    "redis": "fa-solid fa-layer-group",
    "graphql": "fa-solid fa-diagram-project",

    # Cloud & DevOps
    "aws": "fa-brands fa-aws",
    "azure": "fa-brands fa-microsoft",
    "gcp": "fa-brands fa-google",
    "docker": "fa-brands fa-docker",
    "kubernetes": "fa-solid fa-dharmachakra",
    "jenkins": "fa-brands fa-jenkins",
    "terraform": "fa-solid fa-cubes",

    # Version control
    "git": "fa-brands fa-git-alt",
    "github": "fa-brands fa-github",
    "gitlab": "fa-brands fa-gitlab",
    "bitbucket": "fa-brands fa-bitbucket",

    # Design
    "figma": "fa-brands fa-figma",
    "sketch": "fa-brands fa-sketch",
    "adobe xd": "fa-solid fa-pen-nib",
    "photoshop": "fa-solid fa-image",
    "adobe photoshop": "fa-solid fa-image",
    "illustrator": "fa-solid fa-pen-ruler",
    "adobe illustrator": "fa-solid fa-pen-ruler",
    "after effects": "fa-solid fa-film",
    "adobe after effects": "fa-solid fa-film",
    "ae": "fa-solid fa-film",
    "premiere pro": "fa-solid fa-video",
    "adobe premiere pro": "fa-solid fa-video",
    "premiere": "fa-solid fa-video",
    "affinity designer": "fa-solid fa-bezier-curve",
    "affinity photo": "fa-solid fa-camera",
    "affinity": "fa-solid fa-bezier-curve",
    "canva": "fa-solid fa-palette",
    "blender": "fa-solid fa-cube",

    # Office & productivity
    "ms office": "fa-brands fa-microsoft",
    "microsoft office": "fa-brands fa-microsoft",
    "word": "fa-solid fa-file-word",
    "excel": "fa-solid fa-file-excel",
    "powerpoint": "fa-solid fa-file-powerpoint",
    "outlook": "fa-solid fa-envelope",
    "notion": "fa-solid fa-note-sticky",
    "trello": "fa-brands fa-trello",
    "slack": "fa-brands fa-slack",
    "jira": "fa-brands fa-jira",

    # AI/ML
    "tensorflow": "fa-solid fa-brain",
    "pytorch": "fa-solid fa-fire-flame-curved",
    "machine learning": "fa-solid fa-robot",
    "ml": "fa-solid fa-robot",
    "ai": "fa-solid fa-brain",
    "openai": "fa-solid fa-robot",
    "chatgpt": "fa-solid fa-message",

    # Blockchain
    "blockchain": "fa-solid fa-link",
    "ethereum": "fa-brands fa-ethereum",
    "solidity": "fa-brands fa-ethereum",
    "web3": "fa-solid fa-globe",
    "bitcoin": "fa-brands fa-bitcoin",
    "crypto": "fa-solid fa-coins",

    # Mobile
    "react native": "fa-brands fa-react",
    "flutter": "fa-solid fa-mobile-screen",
    "android": "fa-brands fa-android",
    "ios": "fa-brands fa-apple",
    "expo": "fa-solid fa-e",

    # Other tools
    "linux": "fa-brands fa-linux",
    "npm": "fa-brands fa-npm",
    "yarn": "fa-brands fa-yarn",
    "webpack": "fa-solid fa-box",
    "vite": "fa-solid fa-bolt",
    "postman": "fa-solid fa-paper-plane",
    "vs code": "fa-solid fa-code",
    "vscode": "fa-solid fa-code",
    "vim": "fa-solid fa-terminal",

    # AI coding tools
    "antigravity": "fa-solid fa-rocket",
    "v0": "fa-solid fa-wand-magic-sparkles",
    "orchids": "fa-solid fa-seedling",
    "mgx": "fa-solid fa-microchip",
    "cursor": "fa-solid fa-i-cursor",
    "copilot": "fa-solid fa-robot",
}

SKILL_CATEGORIES = [
    "Languages",
    "Frameworks",
    "Tools",
    "Databases",
    "DevOps",
    "Design",
    "Mobile",
    "Vibe Coding",
]


def get_skill_icon(skill_name: str) -> str:
    """Icon class for a skill name, case and surrounding whitespace ignored"""
    normalized = (skill_name or "").strip().lower()
    return SKILL_ICONS.get(normalized, DEFAULT_ICON)
