"""User directory structure creation and initialization.
Auto-creates ~/Documents/minutes2docx/ with a README and a sample minutes file.

On first run, this creates:
- ~/Documents/minutes2docx/
  ├── README.md           (explains what each folder is for)
  ├── input/              (sample_minutes.md; drop generated minutes here)
  ├── output/             (exported .docx files land here)
  ├── configs/            (saved TOML settings)
  └── logs/               (minutes2docx.log lives here)

Safe to call repeatedly - won't overwrite existing user files.
"""

import logging
from pathlib import Path

from minutes2docx.internals.config.define_config import SAMPLE_MINUTES_FILENAME
from minutes2docx.internals.paths import UserFolder, user_dir

log = logging.getLogger("minutes2docx")

README_TEXT = """# minutes2docx

This folder was created automatically.

- input/   Generated meeting minutes (.md or .txt). `sample_minutes.md` is used by `minutes2docx --demo`.
- output/  Exported Word documents, named "<title> - <dd-mm-yyyy>.docx".
- configs/ Saved TOML settings for `minutes2docx --config`.
- logs/    minutes2docx.log
"""

SAMPLE_MINUTES_TEXT = """# Compte Rendu

## Synthèse
La réunion a permis de valider le **budget Q4** et de fixer le calendrier de *déploiement*.

## Points clés
- Budget marketing validé
  - Enveloppe **digitale** en hausse
- Recrutement d'un chef de projet

## Actions
| Action | Responsable | Échéance |
| :--- | :--- | :--- |
| Relancer le fournisseur | Alice | 15/03 |
| Préparer la démo | Bob | 22/03 |

### Prochaine réunion
Mardi prochain, même heure.

## Transcription
Ce passage n'apparaît ni dans l'aperçu ni dans le document exporté.
"""


def ensure_user_scaffold() -> None:
    """
    Create folder structure, README and sample minutes on first run.

    Safe to call every time - won't overwrite existing user files.
    """
    base = user_dir()
    for folder in UserFolder:
        user_dir(folder)
    input_dir = base / UserFolder.INPUT.value

    _write_if_missing(base / "README.md", README_TEXT)
    _write_if_missing(input_dir / SAMPLE_MINUTES_FILENAME, SAMPLE_MINUTES_TEXT)

    log.debug(f"User scaffold ready at {base}")


def _write_if_missing(target: Path, text: str) -> None:
    """Write a scaffold file unless the user already has one at that path."""
    if target.exists():
        log.debug(f"Already exists (not overwriting): {target.name}")
        return

    target.write_text(text, encoding="utf-8")
    log.info(f"Created {target}")
