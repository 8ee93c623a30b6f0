"""
Optical Access Analysis

Counts optical-core accesses for one multi-head self-attention block of a
Vision Transformer.

Access Model (one access per scalar output element):
- Input preparation: 0 (patch embeddings are already resident)
- Q, K, V projections: L × d_model each
- Attention scores (Q × K^T): L × L × h
- Weighted sum (softmax(A) × V): L × L × h

Each step also carries the FLOP count of its matrix multiply for display:
- Projections: L × d_model × d_model
- Attention / weighted sum: h × L × L × d_k, with d_k = d_model / h

FLOPs never feed back into the access counts.
"""

from typing import List

from vitoptics.core.structures import (
    CalculationStep,
    DetailedCalculation,
    ViTConfig,
    format_quantity as fmt,
)


# Step names, in the order they are always produced
INPUT_PREPARATION = 'Input Preparation'
QUERY_PROJECTION = 'Query Projection'
KEY_PROJECTION = 'Key Projection'
VALUE_PROJECTION = 'Value Projection'
ATTENTION_SCORES = 'Attention Scores'
WEIGHTED_SUM = 'Weighted Sum'

STEP_NAMES = (
    INPUT_PREPARATION,
    QUERY_PROJECTION,
    KEY_PROJECTION,
    VALUE_PROJECTION,
    ATTENTION_SCORES,
    WEIGHTED_SUM,
)

PROJECTION_STEPS = (QUERY_PROJECTION, KEY_PROJECTION, VALUE_PROJECTION)
ATTENTION_STEPS = (ATTENTION_SCORES, WEIGHTED_SUM)

STEP_COLORS = {
    INPUT_PREPARATION: '#94a3b8',
    QUERY_PROJECTION: '#3b82f6',
    KEY_PROJECTION: '#10b981',
    VALUE_PROJECTION: '#f59e0b',
    ATTENTION_SCORES: '#ef4444',
    WEIGHTED_SUM: '#8b5cf6',
}


class AccessCalculator:
    """
    Derives per-phase optical access counts from a ViT configuration.

    Stateless: calculate() may be called any number of times (once per sweep
    point, for instance) and always returns an equal result for an equal
    config.
    """

    def calculate(self, vit: ViTConfig) -> DetailedCalculation:
        """
        Build the six calculation steps and their aggregate totals.

        Args:
            vit: ViT configuration snapshot

        Returns:
            DetailedCalculation with steps in fixed order
        """
        d_model = vit.embedding_dim
        h = vit.num_heads
        L = vit.sequence_length
        d_k = vit.head_dim

        steps = [
            self._input_step(L, d_model),
            self._projection_step(QUERY_PROJECTION, 'Q = X × W_q', 'Q', L, d_model),
            self._projection_step(KEY_PROJECTION, 'K = X × W_k', 'K', L, d_model),
            self._projection_step(VALUE_PROJECTION, 'V = X × W_v', 'V', L, d_model),
            self._attention_step(
                ATTENTION_SCORES,
                'A = (Q × K^T) / √d_k',
                'Attention matrix computation - quadratic in sequence length',
                L, h, d_k,
            ),
            self._attention_step(
                WEIGHTED_SUM,
                'Output = softmax(A) × V',
                'Weighted combination using attention weights',
                L, h, d_k,
            ),
        ]

        return self._aggregate(steps)

    def _aggregate(self, steps: List[CalculationStep]) -> DetailedCalculation:
        """Sum access counts into total, projection and attention buckets"""
        by_name = {step.name: step for step in steps}
        projection = sum(by_name[name].access_count for name in PROJECTION_STEPS)
        attention = sum(by_name[name].access_count for name in ATTENTION_STEPS)
        # Input preparation is always free
        total = projection + attention

        return DetailedCalculation(
            steps=tuple(steps),
            total_accesses=total,
            projection_accesses=projection,
            attention_accesses=attention,
        )

    def _input_step(self, L, d_model) -> CalculationStep:
        return CalculationStep(
            name=INPUT_PREPARATION,
            formula='X ∈ ℝ^(L×d_model)',
            narrative=f"Input tensor: {fmt(L)} × {d_model} = {fmt(L * d_model)} elements",
            access_count=0,
            description='Input patches are already in memory',
            display_color=STEP_COLORS[INPUT_PREPARATION],
            flops=0,
        )

    def _projection_step(self, name: str, formula: str, symbol: str, L, d_model) -> CalculationStep:
        flops = L * d_model * d_model
        accesses = L * d_model
        return CalculationStep(
            name=name,
            formula=formula,
            narrative=(f"Matrix multiplication: {fmt(L)} × {d_model} × {d_model} = {fmt(flops)} FLOPs\n"
                       f"Optical accesses: {fmt(accesses)}"),
            access_count=accesses,
            description=f"Each element of {symbol} requires one optical core access",
            display_color=STEP_COLORS[name],
            flops=flops,
        )

    def _attention_step(self, name: str, formula: str, description: str, L, h, d_k) -> CalculationStep:
        per_head_flops = L * L * d_k
        flops = h * per_head_flops
        accesses = L * L * h
        return CalculationStep(
            name=name,
            formula=formula,
            narrative=(f"For each head: {fmt(L)} × {fmt(L)} × {fmt(d_k)} = {fmt(per_head_flops)} FLOPs\n"
                       f"All heads: {h} × {fmt(per_head_flops)} = {fmt(flops)} FLOPs\n"
                       f"Optical accesses: {fmt(accesses)}"),
            access_count=accesses,
            description=description,
            display_color=STEP_COLORS[name],
            flops=flops,
        )


def calculate_accesses_detailed(vit: ViTConfig) -> DetailedCalculation:
    """Convenience wrapper around AccessCalculator().calculate()."""
    return AccessCalculator().calculate(vit)
