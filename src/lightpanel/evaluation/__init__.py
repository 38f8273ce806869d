from lightpanel.evaluation.metrics import (
    hamming_weight,
    reproduces_target,
)
