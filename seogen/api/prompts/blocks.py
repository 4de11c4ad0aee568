"""Reusable prompt blocks shared by all strategies.

Every function returns a German instruction block, or "" when the block does
not apply, so templates can join blocks without conditionals.
"""

from seogen.api.generation.config_resolver import ResolvedConfig

FORBIDDEN_PHRASES: tuple[str, ...] = (
    "In der heutigen Zeit...",
    "In der heutigen digitalen Welt...",
    "Es ist wichtig zu beachten...",
    "Zusammenfassend lässt sich sagen...",
    "In diesem Artikel...",
    "Weit mehr als nur...",
)

FORBIDDEN_PATTERNS: tuple[str, ...] = (
    "Keyword-Stuffing (über der maximalen Keyword-Anzahl)",
    "Passive Formulierungen als Standard",
    "H1 → H3 Sprung (H2 fehlt)",
    "Gleiche Satzanfänge hintereinander (KI-Monotonie)",
    "Erfundene Studien, Preise, Modellnamen oder Spezifikationen",
)


def join_blocks(*blocks: str) -> str:
    """Join non-empty blocks with a blank line."""
    return "\n\n".join(block.strip() for block in blocks if block and block.strip())


def anti_patterns_block() -> str:
    phrases = "\n".join(f'❌ "{phrase}"' for phrase in FORBIDDEN_PHRASES)
    patterns = "\n".join(f"❌ {pattern}" for pattern in FORBIDDEN_PATTERNS)
    return f"""═══ ANTI-PATTERNS (VERBOTEN!) ═══
{phrases}
{patterns}"""


def keyword_block(config: ResolvedConfig, focus_keyword: str) -> str:
    density = config.keyword_density
    span = f"{config.min_keywords}-{config.max_keywords}x"
    return f"""═══ KEYWORD-STRATEGIE ═══
Fokus-Keyword: "{focus_keyword}"
📍 PFLICHT-PLATZIERUNGEN: H1, erste 100 Wörter, mind. 1x H2, letzter Absatz,
   Title + Meta Description
📊 KEYWORD-DICHTE: {density.label}
- Bei {config.target_word_count} Wörtern = {span} Fokus-Keyword
- NIEMALS unnatürliche Wortstellungen
- Synonyme und Variationen statt stumpfer Wiederholung"""


def audience_block(config: ResolvedConfig) -> str:
    if config.expert_audience:
        return """═══ ZIELGRUPPE: FACHPUBLIKUM (B2B) ═══
- Sprich als Kollege, nicht als Verkäufer
- Nutze Fachterminologie selbstverständlich (ICD-10, ICF, Evidenzlevel)
- Zitiere Studien korrekt und nur, wenn sie in den Daten genannt sind
- Biomechanische bzw. technische Details und Praxisszenarien aus Fachperspektive"""
    return """═══ ZIELGRUPPE: ENDKUNDEN (B2C) ═══
- Erkläre komplexe Dinge verständlich, ohne zu simplifizieren
- Nutze Alltagsbeispiele und Analogien
- Fachbegriffe nur mit kurzer Erklärung in Klammern
- Fokus auf Nutzen, nicht auf Features"""


def structure_block(config: ResolvedConfig) -> str:
    common = f"""- Genau EINE H1 (max. 60-70 Zeichen) mit Fokus-Keyword
- H2 für Hauptthemen, H3 nur für echte Unterpunkte
- Absätze mit max. {config.max_paragraph_words} Wörtern
- Mind. 2-3 Listen (<ul>/<ol>), <strong> für Schlüsselbegriffe
- Gesamtlänge ca. {config.target_word_count} Wörter FLIESSTEXT, keine Outline"""

    if config.page_type == "category":
        skeleton = """1. H1: Kategorie + Fokus-Keyword
2. Einstieg (80-150 Wörter): Wofür steht die Kategorie, wem hilft sie?
3. H2: Varianten und Einsatzbereiche im Überblick
4. H2: Auswahlkriterien - worauf es beim Kauf ankommt
5. H2: Marken und Konzepte im Vergleich
6. H2: Anwendung im Alltag bzw. in der Praxis
7. FAQ"""
        heading = "KATEGORIESEITE"
    elif config.page_type == "guide":
        skeleton = """1. H1: Frage bzw. Problem + Fokus-Keyword
2. Einstieg: direkte Antwort in max. 40 Wörtern
3. H2: Grundlagen - was man wissen muss
4. H2: Schritt-für-Schritt-Anleitung (nummerierte Liste)
5. H2: Typische Fehler und wie man sie vermeidet
6. H2: Checkliste
7. FAQ"""
        heading = "RATGEBER"
    else:
        skeleton = """1. H1: Produkt + Fokus-Keyword + Kernnutzen
2. Einstieg (80-150 Wörter): Problem und Lösung
3. H2: Wie funktioniert es? (Wirkprinzip, Technologie)
4. H2: Vorteile im Überblick (Liste)
5. H2: Anwendung und Einsatzbereiche
6. H2: Für wen eignet es sich?
7. FAQ"""
        heading = "PRODUKTSEITE"

    return f"""═══ STRUKTUR: {heading} ═══
{skeleton}

{common}"""


def compliance_block(config: ResolvedConfig) -> str:
    if config.compliance.is_empty:
        return ""
    lines = []
    if config.compliance.mdr:
        lines.append(
            "- MDR/MPDG: Keine Heilversprechen, Zweckbestimmung des Medizinprodukts einhalten"
        )
    if config.compliance.hwg:
        lines.append(
            "- HWG: Keine irreführende Werbung, keine Angstwerbung, "
            "keine Erfolgsgarantien, keine Werbung mit Gutachten ohne Quelle"
        )
    if config.compliance.studies:
        lines.append(
            "- Studien-Validierung: Nur belegbare Studien, Evidenzlevel nennen, "
            "Einschränkungen offenlegen"
        )
    checks = ", ".join(config.compliance.labels)
    items = "\n".join(lines)
    return f"""═══ COMPLIANCE AKTIV: {checks} ═══
{items}
Prüfe JEDE Aussage auf Zulässigkeit und dokumentiere problematische Claims im qualityReport."""


def tonality_block(config: ResolvedConfig) -> str:
    return f"""═══ TONALITÄT & ANREDE ═══
TONALITÄT: {config.tonality_label}
ANREDE: {config.address_style}"""


def output_format_block(config: ResolvedConfig, product_comparison: bool = False) -> str:
    """JSON contract consumed by the response parser."""
    quality_report = (
        """,
  "qualityReport": {
    "status": "green|yellow|red",
    "flags": [
      {"type": "mdr|hwg|study", "severity": "high|medium|low", "issue": "...", "rewrite": "..."}
    ],
    "evidenceTable": [
      {"study": "...", "type": "...", "population": "...", "outcome": "...",
       "effect": "...", "limitations": "...", "source": "..."}
    ]
  }"""
        if not config.compliance.is_empty
        else ""
    )
    comparison = (
        """,
  "productComparison": "HTML-Produktvergleich als Tabelle\""""
        if product_comparison
        else ""
    )
    return f"""═══ AUSGABEFORMAT (JSON) ═══
Antworte AUSSCHLIESSLICH mit EINEM validen JSON-Objekt, ohne Text davor oder danach:
{{
  "seoText": "Vollständiger HTML-Text mit <h1>, <h2>, <h3>, <p>, <ul>, <strong>",
  "faq": [{{"question": "...", "answer": "..."}}],
  "title": "Title Tag (max. 60 Zeichen, Fokus-Keyword vorne)",
  "metaDescription": "Meta Description (max. 155 Zeichen, Fokus-Keyword in den ersten 80 Zeichen)",
  "internalLinks": [{{"url": "...", "anchorText": "..."}}],
  "technicalHints": "Schema.org Empfehlungen"{quality_report}{comparison}
}}"""


# =============================================================================
# Writing-style blocks (fresh generation)
# =============================================================================

WRITING_STYLES: dict[str, str] = {
    "factual": """## SCHREIBSTIL: SACHLICH & INFORMATIV
- Faktenbasiert mit konkreten Details, ruhiger vertrauensbildender Ton
- Klare Struktur, gut scannbar, Listen wo sinnvoll
- Keine Superlative ohne Beleg""",
    "advisory": """## SCHREIBSTIL: BERATEND & NUTZENORIENTIERT
- Entscheidungshilfe geben, Optionen vergleichen, klare Empfehlungen
- Jede Eigenschaft mit dem konkreten Nutzen verbinden
- Typische Fragen und Bedenken des Lesers vorwegnehmen""",
    "sales": """## SCHREIBSTIL: AKTIVIEREND & ÜBERZEUGEND
- Nutzenversprechen in Überschriften, Transformation zeigen (vorher → nachher)
- Jeder Abschnitt endet mit Nutzen oder Handlungsaufforderung
- Ehrlich bleiben: keine Übertreibungen, keine erfundenen Zahlen""",
    "expert-mix": """## SCHREIBSTIL: EXPERTENMIX
(70% Fachwissen • 20% Lösungsorientierung • 10% Storytelling)
- Jeder Absatz: mind. 3 Fachbegriffe, 1 Evidenz, max. 1 Beispiel
- H2-Überschriften fachlich-präzise, nicht emotional
- Ton: wissenschaftlich-autoritativ""",
    "consultant-mix": """## SCHREIBSTIL: BERATERMIX
(40% Fachwissen • 40% Lösungsorientierung • 20% Storytelling)
- Jeder Absatz: 2 Fach-Aussagen + 2 Nutzen-Aussagen + max. 1 Fallbeispiel
- H2-Überschriften: Mix aus "Was ist X?" und "Was bringt X?"
- Ton: beratend-kompetent""",
    "storytelling-mix": """## SCHREIBSTIL: STORYTELLING-MIX
(30% Fachwissen • 30% Lösungsorientierung • 40% Storytelling)
- Jeder Absatz startet mit Szene oder Bild, dann Fakten einstreuen
- Einstieg immer mit einem konkreten Szenario
- Ton: emotional-inspirierend""",
    "conversion-mix": """## SCHREIBSTIL: CONVERSION-MIX
(20% Fachwissen • 60% Lösungsorientierung • 20% Storytelling)
- Jeder Absatz endet mit Nutzen oder CTA
- Listen nur mit Vorteilen, keine Features ohne Nutzen
- Ton: verkaufsstark, aber ehrlich""",
    "balanced-mix": """## SCHREIBSTIL: BALANCED-MIX
(33% Fachwissen • 33% Lösungsorientierung • 33% Storytelling)
- Jeder Absatz: 1 Fach-Aussage + 1 Nutzen-Aussage + 1 Beispiel
- Abwechslung: Fach → Nutzen → Story im Wechsel
- Ton: ausgewogen, spricht alle Käufertypen an""",
}

# Legacy German tone ids share the English blocks
_STYLE_ALIASES = {"sachlich": "factual", "beratend": "advisory", "aktivierend": "sales"}


def writing_style_block(config: ResolvedConfig) -> str:
    key = _STYLE_ALIASES.get(config.tonality_key, config.tonality_key)
    return WRITING_STYLES.get(key, WRITING_STYLES["balanced-mix"])
