import tempfile, yaml, json, os
from typing import Union, Dict, Any, Type, TypeVar
from pathlib import Path
from pydantic import BaseModel, ValidationError
from later.recovery import CorruptionError, FileOperationError, FatalError
from later.logs import get_logger

log = get_logger("io")

DATA_YAML = 0
DATA_JSON = 1

YAML_SUFFIXES = ('.yml', '.yaml')

ModelT = TypeVar('ModelT', bound=BaseModel)

def data_type_for(file_path : Union[Path, str]) -> int:
    """Pick the document format from the file suffix; JSON unless it is a YAML file."""
    if Path(file_path).suffix.lower() in YAML_SUFFIXES:
        return DATA_YAML
    return DATA_JSON

def _cleanup(temp_path):
    if temp_path is not None and os.path.exists(temp_path):
        try:
            os.unlink(temp_path)
            log.debug(f"Cleaned up temporary file: {temp_path}")
        except OSError as cleanup_error:
            log.warning(f"Could not clean up temp file {temp_path}: {cleanup_error}")

def _create_dirs(file_path : Path):
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
    except (OSError, PermissionError) as e:
        error_msg = f"Cannot create directory {file_path.parent}: {e}"
        log.error(error_msg)
        raise FileOperationError(error_msg) from e

def atomic_write(data_type : int, file_path : Union[Path, str], data : Dict[str, Any], create_dirs : bool = False):
    """
    Serialize and save data to a YAML or JSON file using atomic updates.
    """
    file_path = Path(file_path)
    temp_path = None

    if create_dirs:
        _create_dirs(file_path)

    try:
        # Create temporary file in the same directory as target for atomicity
        with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', dir=file_path.parent, prefix=f".{file_path.name}.", suffix='.tmp', delete=False) as temp_file:
            temp_path = temp_file.name
            if data_type == DATA_YAML:
                yaml.safe_dump(data, temp_file, default_flow_style=False, sort_keys=False, indent=2, allow_unicode=True)
            elif data_type == DATA_JSON:
                json.dump(data, temp_file, indent=2, ensure_ascii=False)
            else:
                raise FatalError("Unsupported Data Format")
            temp_file.flush()
            os.fsync(temp_file.fileno())

        # Atomic replace - this either completely succeeds or completely fails
        os.replace(temp_path, file_path)
        log.debug(f"Successfully saved file: {file_path}")
        return True

    except FatalError:
        _cleanup(temp_path)
        raise

    except (yaml.YAMLError, TypeError, ValueError) as e:
        _cleanup(temp_path)
        # FATAL ERROR: Data cannot be serialized
        error_msg = (f"Data serialization failed for {file_path}. "
                    f"In-memory data may be corrupt or contain non-serializable types: {e}")
        log.critical(error_msg)
        raise FatalError(error_msg) from e

    except (IOError, OSError, PermissionError) as e:
        _cleanup(temp_path)
        # RECOVERABLE ERROR: I/O issues
        error_msg = f"I/O error saving file {file_path}: {e}"
        log.error(error_msg)
        raise FileOperationError(error_msg) from e

def save_model(model : BaseModel, file_path : Union[Path, str], create_dirs : bool = True):
    """Write a model to disk in the format implied by the file suffix."""
    return atomic_write(data_type_for(file_path), file_path, model.model_dump(mode='json'), create_dirs)

def load_model(model_type : Type[ModelT], file_path : Union[Path, str]) -> Union[None, ModelT]:
    """
    Load and validate a model from a JSON or YAML file.

    Args:
        model_type: The pydantic model to validate the document against
        file_path: Path to the document

    Returns:
        The parsed model, or None if the file doesn't exist or is empty
    """
    file_path = Path(file_path)
    if not file_path.exists():
        return None

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise CorruptionError(f"Couldn't decode to-do list file {file_path}: {e}") from e
    except (IOError, OSError, PermissionError) as e:
        # I/O errors are recoverable
        raise FileOperationError(f"Failed to read file {file_path}: {e}") from e

    if not text.strip():
        return None

    try:
        if data_type_for(file_path) == DATA_YAML:
            return model_type.model_validate(yaml.safe_load(text))
        return model_type.model_validate_json(text)

    except yaml.YAMLError as e:
        raise CorruptionError(f"YAML syntax error in {file_path}: {e}") from e
    except ValidationError as e:
        # Covers JSON syntax errors as well as documents of the wrong shape
        raise CorruptionError(f"Couldn't parse to-do list file {file_path}: {e}") from e
