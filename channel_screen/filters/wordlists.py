"""
Static lists used by the channel checks.

These are configuration data, not computed values. Callers may pass their own
lists to any check; the sets below are the defaults.
"""

# === Hard phrase taxonomies ===
# Substring, case-insensitive. Reaching the distinct threshold rejects the channel.

KIDS_HARD_PHRASES = (
    "für kinder",
    "kinderlieder",
    "kinderlied",
    "kinderserie",
    "kinderfilm",
    "kinderkanal",
    "kindergarten",
    "kleinkind",
    "für kleinkinder",
    "babylieder",
    "gute nacht geschichte",
    "gutenachtgeschichte",
    "sandmännchen",
    "zeichentrick",
    "trickfilm",
    "märchen für kinder",
    "spielzeug",
    "überraschungsei",
    "paw patrol",
    "peppa wutz",
    "peppa pig",
    "feuerwehrmann sam",
    "nursery rhymes",
    "kids songs",
    "for kids",
    "for toddlers",
    "learn colors",
    "learn numbers",
    "baby shark",
    "cocomelon",
)

ADDICTION_HARD_PHRASES = (
    "online casino",
    "casino bonus",
    "freispiele",
    "free spins",
    "spielautomat",
    "slot machine",
    "slots",
    "sportwetten",
    "wett tipps",
    "wetttipps",
    "betting tips",
    "poker",
    "roulette",
    "blackjack",
    "jackpot",
    "big win",
    "mega win",
    "lootbox",
    "loot box",
    "case opening",
    "krypto signale",
    "crypto signals",
    "shisha",
    "vape",
    "cbd",
    "bierpong",
    "trinkspiel",
)

HARD_PHRASE_TAXONOMIES = {
    "kids": KIDS_HARD_PHRASES,
    "addiction": ADDICTION_HARD_PHRASES,
}


# === Flagged characters ===
# Letters that do not occur in written German. Umlauts and ß are allowed.

_FLAGGED_RANGES = (
    (0x0370, 0x03FF),  # Greek
    (0x0400, 0x04FF),  # Cyrillic
    (0x0530, 0x058F),  # Armenian
    (0x0590, 0x05FF),  # Hebrew
    (0x0600, 0x06FF),  # Arabic
    (0x0750, 0x077F),  # Arabic Supplement
    (0x0900, 0x097F),  # Devanagari
    (0x0E00, 0x0E7F),  # Thai
    (0x10A0, 0x10FF),  # Georgian
    (0x3040, 0x309F),  # Hiragana
    (0x30A0, 0x30FF),  # Katakana
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0xAC00, 0xD7AF),  # Hangul Syllables
)

_FLAGGED_LATIN = (
    "àáâãåāăąæçćĉċčďđèéêëēĕėęěĝğġģĥħìíîïĩīĭįıĵķĺļľŀłñńņňŉòóôõøōŏőœŕŗřśŝşšţťŧ"
    "ùúûũūŭůűųŵýÿŷźżžþð"
    "ÀÁÂÃÅĀĂĄÆÇĆĈĊČĎĐÈÉÊËĒĔĖĘĚĜĞĠĢĤĦÌÍÎÏĨĪĬĮİĴĶĹĻĽĿŁÑŃŅŇÒÓÔÕØŌŎŐŒŔŖŘŚŜŞŠŢŤŦ"
    "ÙÚÛŨŪŬŮŰŲŴÝŸŶŹŻŽÞÐ"
)


def _build_flagged_chars() -> frozenset[str]:
    chars = set(_FLAGGED_LATIN)
    for start, end in _FLAGGED_RANGES:
        chars.update(chr(cp) for cp in range(start, end + 1) if chr(cp).isalpha())
    return frozenset(chars)


NON_GERMAN_CHARS = _build_flagged_chars()


# === German words (language detection) ===
# A channel counts as German if it uses at least N distinct words from this set.

GERMAN_WORDS = frozenset({
    # Pronouns and articles
    "ich", "ist", "nicht", "sie", "du", "das", "die", "es", "und", "der",
    "zu", "ein", "in", "wir", "mir", "mit", "was", "den", "mich", "auf",
    "dass", "er", "eine", "hat", "so", "sind", "von", "dich", "war", "haben",
    "für", "ja", "hier", "an", "habe", "bin", "wie", "noch", "dir", "uns",
    "sich", "nur", "einen", "nein", "dem", "ihn", "auch", "hast", "sein", "ihr",
    "da", "aus", "kann", "aber", "schon", "wenn", "wird", "um", "als", "bist",
    "im", "mal", "doch", "gut", "meine", "jetzt", "weiß", "werden", "nach",
    "oder", "dann", "will", "mein", "mehr", "keine", "etwas", "alles", "muss", "immer",
    "nichts", "man", "wieder", "bei", "hab", "machen", "vor", "mann", "ihm", "einem",
    "tun", "zum", "können", "sagen", "werde", "denn", "warum", "einer", "gehen", "sehen",
    "sehr", "geht", "alle", "über", "müssen", "diese", "einfach", "euch", "kommt", "komm",
    "wollen", "also", "bitte", "frau", "danke", "wer", "zeit", "ganz",
    "wirklich", "leben", "wäre", "gar", "darf", "heute", "wirst", "vielleicht", "könnte", "lassen",
    "hätte", "dort", "diesen", "tag", "soll", "gibt", "arbeit", "kommst", "weil", "sag",
    "ihre", "dein", "deine", "eure", "unsere", "seine", "ihren", "deinen", "meinen",
    # Question words
    "wen", "wem", "wessen", "wo", "wohin", "woher", "wann", "wieso", "weshalb",
    # Adverbs and connectors
    "danach", "darum", "dabei", "dadurch", "dafür", "damit", "dagegen", "dazu",
    "darin", "darauf", "daraus", "daran", "darunter", "darüber", "draußen", "drinnen",
    "oben", "unten", "links", "rechts", "hinten", "daher", "genau", "bestimmt",
    "natürlich", "eigentlich", "halt", "hallo", "tschüss", "entschuldigung",
    # Adjectives
    "schlecht", "richtig", "falsch", "genug", "weniger", "viel", "wenig", "jeder", "jede",
    "kein", "keinen", "anderen", "andere", "anders", "irgendwie", "jemand", "niemand",
    "sonst", "nie", "manchmal", "oft", "selten", "gestern", "morgen", "bald", "gleich",
    "später", "früher", "sofort", "erst", "weiter", "zurück", "kurz", "lange", "gerade",
    "fast", "ungefähr", "sicher", "möglich", "besser", "schön", "groß", "klein", "neu",
    "jung", "stark", "wichtig", "egal", "lustig", "schnell", "langsam", "schwer", "leicht",
    "müde", "krank", "gesund", "warm", "kalt", "heiß", "voll", "leer", "fertig", "kaputt",
    # Common verbs
    "kommen", "kam", "ging", "gesehen", "wissen", "weißt", "gesagt", "sagt", "macht",
    "gemacht", "hatte", "waren", "gewesen", "wurde", "kannst", "konnte", "musst", "sollte",
    "willst", "wollte", "mag", "brauchen", "braucht", "gegeben", "nehmen", "bringen",
    "finden", "gefunden", "stehen", "steht", "liegt", "laufen", "fahren", "arbeiten",
    "lernen", "denken", "fühlen", "reden", "fragen", "hören", "spielen", "gewinnen",
    "verlieren", "schlafen", "essen", "trinken", "kaufen", "schreiben", "lesen", "glauben",
    "verstehen", "kennen", "lieben", "helfen", "warten", "bleiben",
})


# === Topic keywords ===
# Whole-word matching; multi-word entries match consecutive words.

KIDS_KEYWORDS = frozenset({
    "kinder", "kids", "kind", "spielzeug", "toys", "toy",
    "nursery", "rhymes", "lied", "lieder", "songs",
    "baby", "babies", "toddler", "kleinkind",
    "cartoon", "trickfilm", "animation", "animated",
    "schule", "school", "lernen", "learn", "education",
    "familie", "family", "fun", "spaß",
    "challenge", "prank", "slime", "diy",
    "minecraft", "roblox", "fortnite",
    "play", "playing", "gameplay",
    "unboxing", "review",
    "puppenspiel", "puppet",
    "märchen", "fairy", "tale",
    "gute nacht", "bedtime",
    "disney", "lego", "playmobil", "barbie",
    "paw patrol", "peppa", "pig",
})

BEAUTY_KEYWORDS = frozenset({
    "beauty", "schönheit", "kosmetik", "cosmetic",
    "makeup", "make-up", "schminke", "schminken",
    "fashion", "mode", "style", "styling",
    "outfit", "look", "haul", "try-on",
    "skincare", "hautpflege", "routine",
    "hair", "haare", "frisur", "hairstyle",
    "nail", "nägel", "manicure", "pedicure",
    "tutorial", "review", "swatch",
    "vlog", "lifestyle", "influencer",
    "dm", "rossmann", "douglas", "sephora",
    "zara", "h&m", "asos", "shein",
})

GAMING_KEYWORDS = frozenset({
    "game", "gaming", "gamer", "zocken", "zocker",
    "play", "player", "playing", "gameplay",
    "walkthrough", "playthrough", "let's play", "lets play",
    "review", "test", "trailer",
    "stream", "streamer", "live", "twitch",
    "minecraft", "roblox", "fortnite", "gta", "call of duty",
    "league of legends", "valorant", "csgo", "counter strike",
    "nintendo", "playstation", "xbox", "pc", "console",
    "switch", "ps5", "ps4", "xbox series",
    "mod", "addon", "hack", "cheat", "glitch",
    "speedrun", "challenge",
})

TOPIC_KEYWORDS = {
    "kids": KIDS_KEYWORDS,
    "beauty": BEAUTY_KEYWORDS,
    "gaming": GAMING_KEYWORDS,
}


# === Location ===
# DACH region (Germany, Austria, Switzerland)

ALLOWED_COUNTRIES = frozenset({
    "deutschland", "germany", "de", "deutsch",
    "österreich", "austria", "at",
    "schweiz", "switzerland", "ch", "suisse", "svizzera",
})
