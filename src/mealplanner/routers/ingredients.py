"""API routes exposing the ingredient parsing core."""

from fastapi import APIRouter

from mealplanner.normalize import (
    aggregate_ingredients,
    format_display_text,
    identify_unit_type,
    parse_ingredient_line,
)
from mealplanner.plan.servings import scale_ingredients
from mealplanner.schemas import (
    AggregatedItemSchema,
    IngredientLinesRequest,
    ParsedIngredientSchema,
    ScaleRequest,
    ScaleResponse,
)

router = APIRouter(prefix="/api/v1/ingredients", tags=["ingredients"])


@router.post("/parse", response_model=list[ParsedIngredientSchema])
async def parse_lines(request: IngredientLinesRequest) -> list[ParsedIngredientSchema]:
    """Parse each line into quantity, unit and name."""
    results = []
    for line in request.lines:
        parsed = parse_ingredient_line(line)
        results.append(
            ParsedIngredientSchema(
                quantity=parsed.quantity,
                unit=parsed.unit,
                unit_type=identify_unit_type(parsed.unit),
                name=parsed.name,
                original_line=parsed.original_line,
            )
        )
    return results


@router.post("/aggregate", response_model=list[AggregatedItemSchema])
async def aggregate_lines(request: IngredientLinesRequest) -> list[AggregatedItemSchema]:
    """Aggregate lines the same way grocery list generation does."""
    return [
        AggregatedItemSchema(
            name=item.name,
            quantity=item.quantity,
            unit=item.unit,
            display_text=format_display_text(item),
        )
        for item in aggregate_ingredients(request.lines)
    ]


@router.post("/scale", response_model=ScaleResponse)
async def scale_lines(request: ScaleRequest) -> ScaleResponse:
    """Scale every line by a factor, rendering quantities as fractions."""
    return ScaleResponse(
        lines=scale_ingredients(request.lines, request.scale_factor),
        scale_factor=request.scale_factor,
    )
