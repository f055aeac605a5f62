"""
Configuration loader & schema for the synthetic rating-graph generator.
"""

from __future__ import annotations
from pathlib import Path
from typing import Literal

import yaml  # type: ignore
from pydantic import BaseModel, Field, model_validator, ValidationError, ConfigDict


class GeneratorConfig(BaseModel):
    """
    Configuration for the synthetic ALS data generator.

    Attributes:
      out_dir (Path): Directory that receives the shard files.
      nfiles (int): Number of training/validation shard pairs.
      D (int): Number of latent dimensions per factor.
      nusers (int): Size of the user id space.
      nmovies (int): Size of the item (movie) id space.
      nvalidation (int): Validation ratings emitted per movie.
      noise (float): Rating noise stdev. Accepted and validated, never applied.
      stdev (float): Standard deviation of latent factor values.
      alpha (float): Power-law exponent of the out-degree distribution.
      seed (int): RNG seed; identical seed + config gives identical files.
      rating_precision (int): Significant digits written for each rating.
      on_open_error (Literal["raise","log"]):
          "raise" = abort when a directory or shard cannot be created;
          "log"   = log the failure and discard that shard's records.
    """

    # output settings
    out_dir: Path = Field(
        Path("synthetic_data"), description="Location to create the data files"
    )
    nfiles: int = Field(5, gt=0, description="The number of files to generate")

    # graph shape
    D: int = Field(20, gt=0, description="Number of latent dimensions")
    nusers: int = Field(1000, gt=0, description="The number of users")
    nmovies: int = Field(10000, ge=0, description="The number of movies")
    nvalidation: int = Field(
        2, ge=0, description="The validation ratings per movie"
    )

    # distribution knobs
    noise: float = Field(
        0.1, ge=0, description="The standard deviation noise parameter (unused)"
    )
    stdev: float = Field(
        2.0, ge=0, description="The standard deviation in latent factor values"
    )
    alpha: float = Field(1.8, gt=0, description="The power-law constant")
    seed: int = Field(31413, ge=0, description="RNG seed for reproducibility")

    # formatting & failure policy
    rating_precision: int = Field(
        6, ge=1, le=17, description="Significant digits per written rating"
    )
    on_open_error: Literal["raise", "log"] = Field(
        "raise",
        description="Policy when an output directory or shard cannot be created",
    )

    @model_validator(mode="before")
    def convert_paths(cls, values):
        # Ensure out_dir is a Path if provided as str
        if isinstance(values, dict):
            od = values.get("out_dir")
            if isinstance(od, str):
                values["out_dir"] = Path(od)
        return values

    @model_validator(mode="after")
    def check_validation_budget(self):
        # The degree table has nusers - nvalidation ranks
        if self.nusers <= self.nvalidation:
            raise ValueError(
                f"nusers ({self.nusers}) must be greater than "
                f"nvalidation ({self.nvalidation})"
            )
        return self

    model_config = ConfigDict(extra="forbid")


def load_config(path: Path) -> GeneratorConfig:
    """
    Load and validate a GeneratorConfig from a YAML file.

    Parameters
    ----------
    path : Path
        Path to a YAML config file (see project_config/generator_config.yaml).

    Returns
    -------
    GeneratorConfig
        Validated config object.

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the file is not a mapping or any field is missing or invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing config '{path}':\n{e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Error parsing config '{path}': expected a mapping")
    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as e:
        # Re-raise with a clearer prefix
        raise ValueError(f"Error parsing config '{path}':\n{e}") from e
