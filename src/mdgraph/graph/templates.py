"""
HTML templates for the rendering backends.

Both documents share one design system and detail panel; they differ only in
the scene script. Data is injected by replacing ``__GRAPH_DATA__`` with a
JSON object holding ``nodes``, ``edges``, ``details`` and ``options``.
"""

import json

LEVEL_COLORS = ["#e74c3c", "#e67e22", "#f39c12", "#27ae60", "#3498db", "#9b59b6"]
LINK_NODE_COLOR = "#69b3a2"
FALLBACK_COLOR = "#95a5a6"

_HEAD = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>__TITLE__</title>
    __SCRIPTS__
    <style>
        /* ============================================================
           DESIGN SYSTEM
           ============================================================ */
        :root {
            --bg-base: #ffffff;
            --bg-elevated: #f8f9fa;
            --border-subtle: #dee2e6;
            --text-primary: #212529;
            --text-secondary: #6c757d;
            --edge-hierarchy: #adb5bd;
            --edge-reference: #69b3a2;
            --font-sans: -apple-system, BlinkMacSystemFont, "Segoe UI", "Inter", Roboto, sans-serif;
            --radius-md: 6px;
        }

        * { box-sizing: border-box; }

        body {
            margin: 0;
            height: 100vh;
            display: flex;
            flex-direction: column;
            font-family: var(--font-sans);
            color: var(--text-primary);
            background: var(--bg-base);
            overflow: hidden;
        }

        .header {
            height: 48px;
            display: flex;
            align-items: center;
            gap: 16px;
            padding: 0 16px;
            border-bottom: 1px solid var(--border-subtle);
            background: var(--bg-elevated);
        }

        .brand { font-weight: 700; }
        .stats { font-size: 12px; color: var(--text-secondary); }

        .main-container { flex: 1; display: flex; overflow: hidden; }
        #graphContainer { flex: 1; position: relative; }

        /* DETAIL PANEL */
        .detail-panel {
            width: 380px;
            min-width: 380px;
            border-left: 1px solid var(--border-subtle);
            background: var(--bg-elevated);
            padding: 16px;
            overflow-y: auto;
        }
        .detail-panel.hidden { display: none; }
        .detail-title { font-size: 18px; font-weight: 600; margin: 0 0 8px; word-break: break-word; }
        .meta-item { font-size: 12px; margin-bottom: 4px; }
        .meta-label { color: var(--text-secondary); margin-right: 4px; }
        .detail-body { margin-top: 12px; font-size: 14px; line-height: 1.5; }
        .close-btn {
            float: right; border: 1px solid var(--border-subtle); background: var(--bg-base);
            border-radius: var(--radius-md); cursor: pointer;
        }
    </style>
</head>
<body>
    <div class="header">
        <div class="brand">mdgraph</div>
        <div class="stats" id="graphStats"></div>
    </div>
    <div class="main-container">
        <div id="graphContainer">__CANVAS__</div>
        <div class="detail-panel hidden" id="detailPanel">
            <button class="close-btn" id="closeDetail">&times;</button>
            <h2 class="detail-title" id="detailTitle"></h2>
            <div id="detailMeta"></div>
            <div class="detail-body" id="detailBody"></div>
        </div>
    </div>
    <script>
        const rawData = __GRAPH_DATA__;
        const LEVEL_COLORS = __LEVEL_COLORS__;

        function getNodeColor(node) {
            if (node.kind === 'heading') {
                return LEVEL_COLORS[node.level - 1] || '__FALLBACK_COLOR__';
            }
            return '__LINK_NODE_COLOR__';
        }

        function escapeHtml(value) {
            return String(value).replace(/[&<>"']/g, c => ({
                '&': '&amp;', '<': '&lt;', '>': '&gt;', '"': '&quot;', "'": '&#39;'
            }[c]));
        }

        function showDetail(node) {
            const detail = rawData.details[node.id];
            if (!detail) return;
            document.getElementById('detailTitle').textContent = detail.title;
            let meta = '';
            if (detail.kind === 'heading') {
                meta += `<div class="meta-item"><span class="meta-label">Type:</span>Heading ${detail.level}</div>`;
                meta += `<div class="meta-item"><span class="meta-label">Line:</span>${detail.sourceLine}</div>`;
            } else {
                const url = escapeHtml(detail.url);
                meta += `<div class="meta-item"><span class="meta-label">Type:</span>Link</div>`;
                meta += `<div class="meta-item"><span class="meta-label">URL:</span><a href="${url}" target="_blank">${url}</a></div>`;
            }
            document.getElementById('detailMeta').innerHTML = meta;
            document.getElementById('detailBody').innerHTML = detail.bodyHtml;
            document.getElementById('detailPanel').classList.remove('hidden');
        }

        document.getElementById('closeDetail').addEventListener('click', () => {
            document.getElementById('detailPanel').classList.add('hidden');
        });
        document.getElementById('graphStats').textContent =
            `Nodes: ${rawData.nodes.length} · Links: ${rawData.edges.length}`;
"""

_TAIL = """
    </script>
</body>
</html>
"""

PLANAR_SCRIPT = """
        // ============================================================
        // PLANAR SCENE (D3 force layout)
        // ============================================================
        const opts = rawData.options;
        const container = d3.select('#graph');
        const width = document.getElementById('graphContainer').clientWidth;
        const height = document.getElementById('graphContainer').clientHeight || opts.height;

        container.attr('width', width).attr('height', height);
        const svg = container.append('g');

        container.call(d3.zoom()
            .scaleExtent(opts.zoomExtent)
            .on('zoom', (event) => svg.attr('transform', event.transform)));

        const graphNodes = rawData.nodes.map(d => Object.assign({}, d));
        const graphLinks = rawData.edges.map(d => Object.assign({}, d));

        const simulation = d3.forceSimulation(graphNodes)
            .force('link', d3.forceLink(graphLinks).id(d => d.id).distance(opts.linkDistance))
            .force('charge', d3.forceManyBody().strength(opts.charge))
            .force('center', d3.forceCenter(width / 2, height / 2))
            .force('collision', d3.forceCollide().radius(opts.collisionRadius));

        const link = svg.append('g')
            .selectAll('line')
            .data(graphLinks)
            .enter().append('line')
            .attr('class', d => `link ${d.kind}`)
            .attr('stroke', d => d.kind === 'hierarchy' ? '#999' : '#69b3a2')
            .attr('stroke-opacity', 0.6)
            .attr('stroke-width', 2);

        const node = svg.append('g')
            .selectAll('g')
            .data(graphNodes)
            .enter().append('g')
            .attr('class', 'node')
            .style('cursor', 'pointer')
            .on('click', (event, d) => { event.stopPropagation(); showDetail(d); })
            .call(drag(simulation));

        node.append('circle')
            .attr('r', d => d.kind === 'heading' ? 20 - d.level * 2 : 15)
            .attr('fill', d => getNodeColor(d))
            .attr('stroke', '#fff')
            .attr('stroke-width', 2);

        node.append('text')
            .text(d => d.text)
            .attr('y', d => d.kind === 'heading' ? -25 - d.level * 2 : -20)
            .attr('text-anchor', 'middle')
            .attr('font-size', '12px')
            .attr('fill', '#333');

        node.append('title')
            .text(d => d.kind === 'heading'
                ? `Heading ${d.level}: ${d.text} (Line ${d.sourceLine})`
                : `Link: ${d.text} -> ${d.url}`);

        simulation.on('tick', () => {
            link
                .attr('x1', d => d.source.x)
                .attr('y1', d => d.source.y)
                .attr('x2', d => d.target.x)
                .attr('y2', d => d.target.y);
            node.attr('transform', d => `translate(${d.x},${d.y})`);
        });

        function drag(simulation) {
            function dragstarted(event) {
                if (!event.active) simulation.alphaTarget(0.3).restart();
                event.subject.fx = event.subject.x;
                event.subject.fy = event.subject.y;
            }
            function dragged(event) {
                event.subject.fx = event.x;
                event.subject.fy = event.y;
            }
            function dragended(event) {
                if (!event.active) simulation.alphaTarget(0);
                event.subject.fx = null;
                event.subject.fy = null;
            }
            return d3.drag().on('start', dragstarted).on('drag', dragged).on('end', dragended);
        }
"""

SPATIAL_SCRIPT = """
        // ============================================================
        // SPATIAL SCENE (3d-force-graph)
        // ============================================================
        const opts = rawData.options;
        const host = document.getElementById('graphContainer');

        const graph = ForceGraph3D()(document.getElementById('graph3d'))
            .width(host.clientWidth)
            .height(host.clientHeight || opts.height)
            .backgroundColor('#ffffff')
            .showNavInfo(false)
            .nodeLabel('text')
            .nodeVal('val')
            .nodeColor(node => getNodeColor(node))
            .nodeOpacity(0.9)
            .linkColor(link => link.kind === 'hierarchy' ? '#adb5bd' : '#dee2e6')
            .linkOpacity(0.7)
            .linkDirectionalParticles('value')
            .linkDirectionalParticleSpeed(opts.particleSpeed)
            .linkDirectionalParticleWidth(1)
            .onNodeClick(node => showDetail(node))
            .onNodeHover(node => { host.style.cursor = node ? 'pointer' : 'default'; });

        graph
            .d3Force('charge', d3.forceManyBody().strength(opts.charge))
            .d3Force('link', d3.forceLink().id(d => d.id).distance(opts.linkDistance))
            .d3Force('center', d3.forceCenter(0, 0))
            .d3Force('collision', d3.forceCollide().radius(opts.collisionRadius));

        graph.graphData({
            nodes: rawData.nodes.map(d => Object.assign({}, d)),
            links: rawData.edges.map(d => Object.assign({ value: 1 }, d)),
        });

        window.addEventListener('resize', () => {
            graph.width(host.clientWidth).height(host.clientHeight);
        });

        for (const command of opts.viewCommands) {
            if (command === 'reset_camera') graph.controls().reset();
            if (command === 'zoom_to_fit') graph.onEngineStop(() => graph.zoomToFit(400));
        }
"""

PLANAR_SCRIPTS = '<script src="https://d3js.org/d3.v7.min.js"></script>'
SPATIAL_SCRIPTS = (
    '<script src="https://d3js.org/d3.v7.min.js"></script>\n'
    '    <script src="https://unpkg.com/3d-force-graph"></script>'
)

PLANAR_CANVAS = '<svg id="graph" width="100%" height="100%"></svg>'
SPATIAL_CANVAS = '<div id="graph3d" style="position:absolute;top:0;left:0;width:100%;height:100%"></div>'


def build_document(title: str, scripts: str, canvas: str, scene_script: str) -> str:
    """Assemble a full HTML document template around a scene script."""
    return (
        _HEAD.replace("__TITLE__", title)
        .replace("__SCRIPTS__", scripts)
        .replace("__CANVAS__", canvas)
        .replace("__LEVEL_COLORS__", json.dumps(LEVEL_COLORS))
        .replace("__FALLBACK_COLOR__", FALLBACK_COLOR)
        .replace("__LINK_NODE_COLOR__", LINK_NODE_COLOR)
        + scene_script
        + _TAIL
    )


PLANAR_TEMPLATE = build_document("mdgraph · Planar View", PLANAR_SCRIPTS, PLANAR_CANVAS, PLANAR_SCRIPT)
SPATIAL_TEMPLATE = build_document("mdgraph · Spatial View", SPATIAL_SCRIPTS, SPATIAL_CANVAS, SPATIAL_SCRIPT)
