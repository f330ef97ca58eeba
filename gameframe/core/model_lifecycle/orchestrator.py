# File: gameframe/core/model_lifecycle/orchestrator.py

import gc
import torch
import logging
from threading import Lock
from .types import ModelType

logger = logging.getLogger(__name__)

class ModelOrchestrator:
    """
    Singleton Resource Manager.
    Keeps a single speech model resident so back-to-back clips reuse it.
    """
    _instance = None
    _lock = Lock()

    def __new__(cls):
        with cls._lock:
            if cls._instance is None:
                cls._instance = super(ModelOrchestrator, cls).__new__(cls)
                cls._instance._current_key = None
                cls._instance._loaded_model = None
        return cls._instance

    def request_model(self, model_type: ModelType, variant: str, loader_func):
        """
        Request usage of a model. If it's not loaded, unload current and load requested.

        Args:
            model_type: The enum identifier for the model.
            variant: Size/name of the model (e.g. 'tiny', 'base').
            loader_func: A lambda/function that returns the loaded model object.
                         Only called if the model needs to be loaded.
        """
        key = (model_type, variant)
        with self._lock:
            # 1. Already loaded? Return immediately.
            if self._current_key == key and self._loaded_model is not None:
                return self._loaded_model

            # 2. Unload different model if exists
            if self._loaded_model is not None:
                self._unload()

            # 3. Load new model
            logger.info(f"Orchestrator: Loading {model_type.value}/{variant}...")
            try:
                self._loaded_model = loader_func()
                self._current_key = key
                return self._loaded_model
            except Exception as e:
                logger.error(f"Failed to load {model_type.value}/{variant}: {e}")
                raise e

    def _unload(self):
        """Removes the current model and releases accelerator memory."""
        if self._current_key:
            logger.info(f"Orchestrator: Unloading {self._current_key[0].value}/{self._current_key[1]}...")

        del self._loaded_model
        self._loaded_model = None
        self._current_key = None

        gc.collect()
        if torch.cuda.is_available():
            torch.cuda.empty_cache()

    def get_current_model_type(self):
        """Helper for testing state."""
        return self._current_key[0] if self._current_key else None
