"""
dimple.analysis.logging

Logging utilities for profiling runs.
"""

from pathlib import Path
from typing import Callable, Optional, Union


def create_logger(
    log_file: Optional[Union[str, Path]] = None,
    verbose: bool = True,
) -> Callable[[dict], None]:
    """Create logging function for profiling metrics.
    
    Args:
        log_file: Optional file that receives every metrics dict, one per line.
        verbose: Print a one-line summary per stage.
    
    Returns:
        Logging callback function that accepts a metrics dict.
    """
    log_path = Path(log_file) if log_file is not None else None
    
    def log(metrics: dict):
        stage = metrics.get("stage", "?")
        
        if verbose:
            if stage == "start":
                print(f"Profiling {metrics.get('dataset_id', 'unnamed')}: "
                      f"{metrics.get('rows', '?')} rows x {metrics.get('columns', '?')} columns "
                      f"(device: {metrics.get('device', 'cpu')})")
            elif stage == "summary":
                print(f"  Missing cells: {metrics['total_na']} "
                      f"({metrics['fraction_missingness']*100:.1f}%) | "
                      f"complete cases: {metrics['complete_cases']}")
            elif stage == "patterns":
                print(f"  Patterns: {metrics['n_patterns']} distinct "
                      f"({metrics['incomplete_rows']} incomplete rows)")
            elif stage == "clustering":
                if metrics.get("error"):
                    print(f"  Clustering skipped: {metrics['error']}")
                else:
                    print(f"  Clustering: {metrics['n_variables']} variables")
            elif stage == "done":
                print(f"  Done in {metrics.get('elapsed', 0):.3f}s")
            else:
                print(f"  {stage}: {metrics}")
        
        if log_path is not None:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(log_path, "a") as f:
                f.write(f"{metrics}\n")
    
    return log
